"""Tests for output post-processing."""
import pytest

from codegen.postprocess import add_class_prefix, component_identifier


class TestAddClassPrefix:

    def test_prefixes_every_class(self):
        code = '<div class="flex p-4">\n  <span class="text-sm"></span>\n</div>'
        assert add_class_prefix(code, 'tw-') == (
            '<div class="tw-flex tw-p-4">\n  <span class="tw-text-sm"></span>\n</div>'
        )

    def test_class_name_attribute(self):
        assert add_class_prefix('<div className="w-4" />', 'x-') == '<div className="x-w-4" />'

    def test_other_attributes_untouched(self):
        code = '<div data-class="flex" title="class"></div>'
        assert add_class_prefix(code, 'tw-') == code

    @pytest.mark.parametrize('prefix', [None, ''])
    def test_empty_prefix(self, prefix):
        assert add_class_prefix('<div class="flex"></div>', prefix) == '<div class="flex"></div>'


class TestComponentIdentifier:

    @pytest.mark.parametrize('name,expected', [
        ('my card / v2', 'MyCardV2'),
        ('Profile Card', 'ProfileCard'),
        ('', 'Component'),
        ('!!!', 'Component'),
        ('404 page', 'Component404Page'),
    ])
    def test_component_identifier(self, name, expected):
        assert component_identifier(name) == expected
