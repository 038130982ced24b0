"""
Admin client tests. The HTTP session is a MagicMock, so these run without
a server and assert on the requests the client would send.
"""

from unittest.mock import MagicMock

import pytest
import requests

from folio.client import AdminClient
from folio.core.errors import BackendFailure, NotFound, Unauthorized, ValidationError

BASE = "http://portfolio.test"


def response(status=200, body=None, text=""):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = body if body is not None else {}
    resp.text = text
    return resp


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def admin(session):
    return AdminClient(BASE, password="secret", session=session)


def sent(session, index=-1):
    """(method, url, kwargs) of a recorded session.request call."""
    call = session.request.call_args_list[index]
    method, url = call.args
    return method, url, call.kwargs


def test_login_sends_password_header(session):
    session.request.return_value = response(body=[{"id": 1}])
    client = AdminClient(BASE, session=session)

    assert client.login("secret") == [{"id": 1}]
    method, url, kwargs = sent(session)
    assert (method, url) == ("GET", f"{BASE}/api/messages")
    assert kwargs["headers"] == {"x-admin-password": "secret"}
    assert client.is_authenticated


def test_unauthorized_clears_session(admin, session):
    admin.editing["projects"] = 5
    session.request.return_value = response(401, {"success": False, "message": "Unauthorized"})

    with pytest.raises(Unauthorized):
        admin.list_messages()
    assert admin.password is None
    assert not admin.is_authenticated
    assert admin.editing == {}


def test_calls_without_password_are_refused(session):
    client = AdminClient(BASE, session=session)
    with pytest.raises(Unauthorized):
        client.delete_message(1)
    session.request.assert_not_called()


def test_public_reads_skip_header(admin, session):
    session.request.return_value = response(body=[{"id": 2, "title": "Clip"}])

    assert admin.list("videos") == [{"id": 2, "title": "Clip"}]
    _, url, kwargs = sent(session)
    assert url == f"{BASE}/api/videos"
    assert "x-admin-password" not in kwargs["headers"]
    assert admin.collections["videos"] == [{"id": 2, "title": "Clip"}]


def test_error_statuses_map_to_errors(admin, session):
    session.request.return_value = response(404, {"success": False, "message": "Message not found"})
    with pytest.raises(NotFound, match="Message not found"):
        admin.toggle_read(9)

    session.request.return_value = response(400, {"success": False, "message": "Only image files allowed!"})
    with pytest.raises(ValidationError):
        admin.save_video({"videoUrl": "x"})


def test_network_error_is_backend_failure(admin, session):
    session.request.side_effect = requests.ConnectionError("refused")
    with pytest.raises(BackendFailure):
        admin.list_messages()


def test_save_without_edit_posts_and_refreshes(admin, session):
    created = {"id": 10, "videoUrl": "https://youtu.be/dQw4w9WgXcQ"}
    session.request.side_effect = [
        response(201, {"success": True, "data": created}),
        response(body=[created]),
    ]

    assert admin.save_video({"title": None, "videoUrl": created["videoUrl"]}) == created

    method, url, kwargs = sent(session, 0)
    assert (method, url) == ("POST", f"{BASE}/api/videos")
    assert kwargs["json"] == {"videoUrl": created["videoUrl"]}
    assert sent(session, 1)[:2] == ("GET", f"{BASE}/api/videos")
    assert admin.collections["videos"] == [created]


def test_begin_edit_then_save_puts(admin, session):
    project = {"id": 7, "title": "Old", "projectUrl": "https://example.com"}
    session.request.side_effect = [
        response(body=[project]),
        response(body={"success": True, "data": {**project, "title": "New"}}),
        response(body=[{**project, "title": "New"}]),
    ]

    assert admin.begin_edit("projects", 7) == project
    assert admin.forms["projects"]["title"] == "Old"

    result = admin.save_project({"title": "New"})
    assert result["title"] == "New"

    method, url, kwargs = sent(session, 1)
    assert (method, url) == ("PUT", f"{BASE}/api/projects/7")
    assert kwargs["data"] == {"title": "New"}
    assert kwargs["headers"] == {"x-admin-password": "secret"}
    assert "projects" not in admin.editing


def test_begin_edit_unknown_record(admin, session):
    session.request.return_value = response(body=[{"id": 1}])
    with pytest.raises(NotFound):
        admin.begin_edit("hero_photos", 2)
    assert "hero_photos" not in admin.editing


def test_save_project_uploads_image(admin, session, tmp_path):
    image = tmp_path / "shot.png"
    image.write_bytes(b"\x89PNG")
    session.request.side_effect = [
        response(201, {"success": True, "data": {"id": 1}}),
        response(body=[{"id": 1}]),
    ]

    admin.save_project({"title": "Site", "projectUrl": "https://example.com"}, image_path=str(image))

    method, _, kwargs = sent(session, 0)
    assert method == "POST"
    name, _, mimetype = kwargs["files"]["image"]
    assert (name, mimetype) == ("shot.png", "image/png")


def test_reorder_sends_id_list(admin, session):
    session.request.side_effect = [
        response(body={"success": True, "data": []}),
        response(body=[]),
    ]
    admin.reorder("hero_photos", (3, 1, 2))

    method, url, kwargs = sent(session, 0)
    assert (method, url) == ("POST", f"{BASE}/api/hero-photos/reorder")
    assert kwargs["json"] == {"order": [3, 1, 2]}


def test_get_resume_unwraps_envelope(admin, session):
    session.request.return_value = response(body={"success": False, "message": "No resume found"})
    assert admin.get_resume() is None

    session.request.return_value = response(body={"success": True, "data": {"id": 1, "filename": "cv.pdf"}})
    assert admin.get_resume() == {"id": 1, "filename": "cv.pdf"}


def test_export_csv_writes_file(admin, session, tmp_path):
    session.request.return_value = response(text="Timestamp,Name,Email,Message,Read\n")
    target = tmp_path / "inbox.csv"

    text = admin.export_messages_csv(str(target))
    assert text.startswith("Timestamp")
    assert target.read_text() == text
    assert sent(session)[1] == f"{BASE}/api/messages/export"
