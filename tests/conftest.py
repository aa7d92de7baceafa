"""
Shared fixtures for the FolioCMS test suite.
"""

import os
import shutil
import tempfile

import pytest
from flask import Flask

from foliocms import FolioCMS
from foliocms.core.project_store import ProjectStore

ADMIN_USERNAME = 'admin'
ADMIN_PASSWORD = 'admin123'


def make_project(name='Test Project', desc='A portfolio project used in tests',
                 category='mern', image='test-project'):
    return {
        'name': name,
        'desc': desc,
        'category': category,
        'image': image,
        'links': {
            'view': 'https://example.com',
            'code': 'https://github.com/example'
        }
    }


@pytest.fixture
def tmp_data_dir():
    """Create a temporary data directory, cleaned up after."""
    d = tempfile.mkdtemp(prefix="foliocms-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def store(tmp_data_dir):
    """Store over an empty projects.json."""
    s = ProjectStore(
        os.path.join(tmp_data_dir, 'projects', 'projects.json'),
        os.path.join(tmp_data_dir, 'backups'),
    )
    s.ensure_document()
    return s


@pytest.fixture
def app(tmp_data_dir):
    """Flask app with every FolioCMS module registered on a temp data dir."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["PROJECTS_FILE"] = os.path.join(tmp_data_dir, "projects", "projects.json")
    app.config["BACKUP_DIR"] = os.path.join(tmp_data_dir, "backups")
    app.config["IMAGES_DIR"] = os.path.join(tmp_data_dir, "images")
    app.config["ADMIN_USERNAME"] = ADMIN_USERNAME
    app.config["ADMIN_PASSWORD"] = ADMIN_PASSWORD
    app.config["PERSIST_PROJECT_IDS"] = True
    FolioCMS(app)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    """Test client holding an admin session."""
    c = app.test_client()
    response = c.post('/api/auth/login', json={
        'username': ADMIN_USERNAME,
        'password': ADMIN_PASSWORD,
    })
    assert response.status_code == 200, response.get_json()
    return c
