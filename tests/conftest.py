"""
Shared fixtures for the Folio test suite.

Run with: pytest tests/ -v
Install test dependencies with: pip install -e ".[dev]"
"""

import io
import os
import shutil
import tempfile

import pytest
from flask import Flask

from folio import Folio

ADMIN_PASSWORD = "test-password"
ADMIN = {"x-admin-password": ADMIN_PASSWORD}

# Smallest valid-looking payloads; content is never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
PDF_BYTES = b"%PDF-1.4\n%test\n"


def png(name="shot.png"):
    return (io.BytesIO(PNG_BYTES), name, "image/png")


def pdf(name="resume.pdf"):
    return (io.BytesIO(PDF_BYTES), name, "application/pdf")


def base_config(root, **overrides):
    config = {
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
        "DATA_DIR": os.path.join(root, "data"),
        "UPLOAD_FOLDER": os.path.join(root, "uploads"),
        "STORAGE_BACKEND": "local",
    }
    config.update(overrides)
    return config


@pytest.fixture
def tmp_root():
    """Temporary directory for JSON collections and uploads, cleaned up after."""
    d = tempfile.mkdtemp(prefix="folio-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_root):
    """Flask app with every Folio module on the local JSON backend."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    Folio(app, base_config(tmp_root))
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage(app):
    return app.extensions["folio"].storage


@pytest.fixture
def remote_app(tmp_root):
    """Flask app on the remote backend: in-memory SQLite plus a bucket config."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    Folio(app, base_config(
        tmp_root,
        STORAGE_BACKEND="remote",
        SQLALCHEMY_DATABASE_URI="sqlite://",
        DO_SPACES_REGION="ams3",
        DO_SPACES_NAME="folio-test",
        DO_SPACES_KEY="key",
        DO_SPACES_SECRET="secret",
    ))
    return app


@pytest.fixture
def remote_client(remote_app):
    return remote_app.test_client()
