"""
Upload an image through an editor with the custom upload adapter
"""
import asyncio
import logging

from uploadadapter import (
    Editor,
    StaticTokenProvider,
    UploadError,
    custom_image_upload_adapter_plugin,
    read_upload_file,
    setup_logging,
)


async def main():
    logging.basicConfig()
    setup_logging(logging.DEBUG)

    editor = Editor(
        config={
            'custom_image_upload': {
                'base_api_url': 'https://api.example.com',
                'api': 'images',
                'auth_open_id_service': StaticTokenProvider('my-token'),
            }
        },
        plugins=[custom_image_upload_adapter_plugin],
    )

    repository = editor.plugins.get('FileRepository')
    loader = repository.create_loader(await read_upload_file('photo.jpg'))

    upload = asyncio.ensure_future(loader.upload())
    while not upload.done():
        await asyncio.wait({upload}, timeout=0.2)
        print(f"Progress: {loader.uploaded_percent:.1f}%")

    try:
        print(f"Image URL: {upload.result()['default']}")
    except UploadError as e:
        print(f"Upload failed: {e}")


if __name__ == "__main__":
    asyncio.run(main())
