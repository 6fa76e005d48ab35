"""Tests for the plugin installer."""
import logging

import pytest

from uploadadapter import Editor, StaticTokenProvider, custom_image_upload_adapter_plugin
from uploadadapter.core.upload import UploadAdapter


def complete_options():
    return {
        'base_api_url': "https://api.example.com",
        'api': "images",
        'auth_open_id_service': StaticTokenProvider("tok"),
    }


class TestCustomImageUploadAdapterPlugin:
    """Test suite for custom_image_upload_adapter_plugin."""

    def test_registers_factory(self, cat_file):
        editor = Editor(config={'custom_image_upload': complete_options()})

        assert custom_image_upload_adapter_plugin(editor) is True

        repository = editor.plugins.get('FileRepository')
        loader = repository.create_loader(cat_file)
        assert isinstance(loader.adapter, UploadAdapter)
        assert loader.adapter.loader is loader
        assert loader.adapter.config.endpoint == "https://api.example.com/images"

    def test_fresh_adapter_per_loader(self, cat_file):
        editor = Editor(
            config={'custom_image_upload': complete_options()},
            plugins=[custom_image_upload_adapter_plugin]
        )
        repository = editor.plugins.get('FileRepository')

        first = repository.create_loader(cat_file)
        second = repository.create_loader(cat_file)

        assert first.adapter is not second.adapter

    def test_missing_block(self, caplog):
        editor = Editor()

        with caplog.at_level(logging.ERROR, logger='uploadadapter.plugin'):
            installed = custom_image_upload_adapter_plugin(editor)

        assert installed is False
        assert editor.plugins.get('FileRepository').create_upload_adapter is None
        assert "custom-image-upload-adapter-missing-custom_image_upload" in caplog.text

    @pytest.mark.parametrize("field", ['base_api_url', 'api', 'auth_open_id_service'])
    def test_missing_field(self, caplog, field):
        options = complete_options()
        del options[field]
        editor = Editor(config={'custom_image_upload': options})

        with caplog.at_level(logging.ERROR, logger='uploadadapter.plugin'):
            installed = custom_image_upload_adapter_plugin(editor)

        assert installed is False
        assert editor.plugins.get('FileRepository').create_upload_adapter is None
        messages = [r.getMessage() for r in caplog.records]
        assert len(messages) == 1
        assert messages[0].startswith(f"custom-image-upload-adapter-missing-{field}")

    def test_every_missing_field_is_reported(self, caplog):
        editor = Editor(config={'custom_image_upload': {'api': "images"}})

        with caplog.at_level(logging.ERROR, logger='uploadadapter.plugin'):
            custom_image_upload_adapter_plugin(editor)

        codes = [r.getMessage().split(':')[0] for r in caplog.records]
        assert codes == [
            "custom-image-upload-adapter-missing-base_api_url",
            "custom-image-upload-adapter-missing-auth_open_id_service",
        ]

    def test_editor_keeps_working_without_adapter(self, caplog, cat_file):
        editor = Editor(plugins=[custom_image_upload_adapter_plugin])

        with caplog.at_level(logging.ERROR):
            loader = editor.plugins.get('FileRepository').create_loader(cat_file)

        assert loader is None
        assert "filerepository-no-upload-adapter" in caplog.text
