"""
Image Storage Tests
===================

Upload naming, listing, resolution order and deletion of project images.
"""

import os

import pytest

from foliocms.core import storage
from foliocms.core.errors import NotFound, ValidationFailed


@pytest.fixture
def images_dir(app):
    with app.app_context():
        yield app.config["IMAGES_DIR"]


def _touch(folder, name, data=b'img'):
    os.makedirs(folder, exist_ok=True)
    with open(os.path.join(folder, name), 'wb') as f:
        f.write(data)


def test_sanitize_project_name():
    assert storage.sanitize_project_name('My Cool App!') == 'mycoolapp'
    assert len(storage.sanitize_project_name('x' * 50)) == 20


def test_sanitize_original_name():
    assert storage.sanitize_original_name('screen shot (1).PNG') == 'screen_shot_1'
    assert storage.sanitize_original_name('../../etc/passwd.png') == 'passwd'
    assert storage.sanitize_original_name('été photo.jpg') == 'ete_photo'


def test_save_upload_uses_project_name_and_suffix(images_dir):
    result = storage.save_upload(b'\x89PNG data', 'Shot.PNG', 'image/png', project_name='My Cool App')

    assert result['filename'].startswith('mycoolapp_')
    assert result['storedName'] == result['filename'] + '.png'
    assert result['originalName'] == 'Shot.PNG'
    assert result['size'] == len(b'\x89PNG data')
    assert os.path.isfile(os.path.join(images_dir, result['storedName']))


def test_save_upload_same_name_does_not_collide(images_dir):
    first = storage.save_upload(b'one', 'a.png', 'image/png', project_name='Same')
    second = storage.save_upload(b'two', 'a.png', 'image/png', project_name='Same')
    assert first['filename'] != second['filename']


def test_save_upload_falls_back_to_original_name(images_dir):
    result = storage.save_upload(b'data', 'holiday photo.jpg', 'image/jpeg')
    assert result['filename'].startswith('holiday_photo_')
    assert result['storedName'].endswith('.jpg')


def test_save_upload_rejects_mimetype(images_dir):
    with pytest.raises(ValidationFailed):
        storage.save_upload(b'data', 'doc.pdf', 'application/pdf')
    assert os.listdir(images_dir) == []


def test_save_upload_rejects_oversized(app, images_dir):
    app.config['MAX_FILE_SIZE'] = 10
    with pytest.raises(ValidationFailed) as exc_info:
        storage.save_upload(b'x' * 11, 'big.png', 'image/png')
    assert 'File too large' in exc_info.value.message


def test_list_images_filters_non_images(images_dir):
    _touch(images_dir, 'b.jpg')
    _touch(images_dir, 'a.png')
    _touch(images_dir, 'notes.txt')

    images = storage.list_images()

    assert images == [
        {'filename': 'a', 'fullName': 'a.png', 'extension': '.png'},
        {'filename': 'b', 'fullName': 'b.jpg', 'extension': '.jpg'},
    ]


def test_list_images_missing_dir(tmp_data_dir):
    assert storage.list_images(os.path.join(tmp_data_dir, 'absent')) == []


def test_resolve_image_prefers_png(images_dir):
    _touch(images_dir, 'logo.webp')
    _touch(images_dir, 'logo.png')

    assert storage.resolve_image('logo') == os.path.abspath(os.path.join(images_dir, 'logo.png'))
    assert storage.resolve_image('missing') is None
    assert storage.resolve_image('../logo') is None


def test_image_or_placeholder(app, images_dir, tmp_data_dir):
    placeholder = os.path.join(tmp_data_dir, 'placeholder.png')
    _touch(tmp_data_dir, 'placeholder.png')

    app.config['PLACEHOLDER_IMAGE'] = None
    assert storage.image_or_placeholder('missing') is None
    app.config['PLACEHOLDER_IMAGE'] = placeholder
    assert storage.image_or_placeholder('missing') == os.path.abspath(placeholder)


def test_delete_image_by_logical_name(images_dir):
    _touch(images_dir, 'shot.jpg')
    _touch(images_dir, 'shot.png')

    deleted = storage.delete_image('shot')

    assert deleted == 'shot.jpg'
    assert sorted(os.listdir(images_dir)) == ['shot.png']


def test_delete_missing_image_raises(images_dir):
    with pytest.raises(NotFound):
        storage.delete_image('ghost')
    with pytest.raises(NotFound):
        storage.delete_image('../etc/passwd')
