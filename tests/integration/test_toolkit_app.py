"""
Integration tests: a FastAPI service using the toolkit end to end.
"""

import json

import httpx
import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from pydantic import BaseModel

from neo_toolkit import Toolkit, get_toolkit, register_exception_handlers, success_json
from neo_toolkit.files.models import UploadOptions


class Foo(BaseModel):
    foo: str = ""


@pytest.fixture
def toolkit(make_settings):
    return Toolkit(make_settings(
        allowed_content_types={"image/png", "image/jpeg"},
        max_json_bytes=64,
    ))


@pytest.fixture
def client(toolkit, tmp_path):
    upload_dir = tmp_path / "uploads"
    static_dir = tmp_path / "static"
    static_dir.mkdir()
    (static_dir / "report.txt").write_text("quarterly numbers")

    app = FastAPI()
    register_exception_handlers(app, is_production=False)

    @app.post("/upload")
    async def upload(request: Request, tools: Toolkit = Depends(get_toolkit)):
        files = await tools.upload_files(request, upload_dir, UploadOptions(rename=False))
        return success_json(
            f"{len(files)} file(s) uploaded",
            [{"name": f.stored_name, "type": f.content_type} for f in files],
        )

    @app.post("/upload-one")
    async def upload_one(request: Request, tools: Toolkit = Depends(get_toolkit)):
        uploaded = await tools.upload_one_file(request, upload_dir)
        return tools.write_json({"original": uploaded.original_name, "stored": uploaded.stored_name})

    @app.post("/json")
    async def receive_json(request: Request, tools: Toolkit = Depends(get_toolkit)):
        payload = await tools.read_json(request, Foo)
        return tools.write_json(payload, status_code=202, headers={"X-Handled": "yes"})

    @app.get("/slug/{value}")
    def slug(value: str, tools: Toolkit = Depends(get_toolkit)):
        return tools.write_json({"slug": tools.slugify(value)})

    @app.get("/download/{name}")
    def download(name: str, tools: Toolkit = Depends(get_toolkit)):
        return tools.download_static_file(static_dir, name, "report-2024.txt")

    app.dependency_overrides[get_toolkit] = lambda: toolkit
    return TestClient(app)


class TestUploadEndpoints:
    """Test multipart uploads through a running application."""

    def test_upload(self, client, png_bytes, jpeg_bytes):
        """Test allowed files are stored and reported."""
        response = client.post("/upload", files=[
            ("files", ("a.png", png_bytes, "image/png")),
            ("files", ("b.jpg", jpeg_bytes, "image/jpeg")),
        ])
        assert response.status_code == 200
        assert response.json() == {
            "error": False,
            "message": "2 file(s) uploaded",
            "data": [
                {"name": "a.png", "type": "image/png"},
                {"name": "b.jpg", "type": "image/jpeg"},
            ],
        }

    def test_upload_rejected_type(self, client):
        """Test a refused type maps to 415 with the envelope."""
        response = client.post("/upload", files={"file": ("a.txt", b"hello", "text/plain")})
        assert response.status_code == 415
        assert response.json() == {
            "error": True,
            "message": "the uploaded file type text/plain is not permitted",
        }

    def test_upload_one_renames(self, client, png_bytes):
        """Test the single-file endpoint renames by default."""
        response = client.post("/upload-one", files={"file": ("a.png", png_bytes, "image/png")})
        assert response.status_code == 200
        body = response.json()
        assert body["original"] == "a.png"
        assert body["stored"] != "a.png"
        assert body["stored"].endswith(".png")

    def test_upload_one_without_files(self, client):
        """Test a form without files maps to 400."""
        response = client.post(
            "/upload-one",
            content=b"--b\r\nContent-Disposition: form-data; name=\"x\"\r\n\r\n1\r\n--b--\r\n",
            headers={"Content-Type": "multipart/form-data; boundary=b"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "no file was uploaded"


class TestJSONEndpoints:
    """Test JSON reading and writing through a running application."""

    def test_round_trip(self, client):
        """Test a valid body is echoed with status and headers."""
        response = client.post("/json", content=b'{"foo": "bar"}')
        assert response.status_code == 202
        assert response.headers["x-handled"] == "yes"
        assert response.json() == {"foo": "bar"}

    @pytest.mark.parametrize("body,message", [
        (b'{"foo":}', "body contains badly-formed JSON (at character 7)"),
        (b'{"foo": 1}', 'body contains incorrect JSON type for field "foo"'),
        (b'{"foo": "bar"}{"alpha": "beta"}', "body must contain only one JSON value"),
        (b"", "body must not be empty"),
        (b'{"fooo": "bar"}', 'body contains unknown key "fooo"'),
        (b'{"foo": "bar"', "body contains badly-formed JSON"),
    ])
    def test_rejections(self, client, body, message):
        """Test rejected bodies produce 400 envelopes with stable messages."""
        response = client.post("/json", content=body)
        assert response.status_code == 400
        assert response.json() == {"error": True, "message": message}

    def test_body_too_large(self, client):
        """Test bodies over the JSON ceiling map to 413."""
        response = client.post("/json", content=json.dumps({"foo": "x" * 100}).encode())
        assert response.status_code == 413
        assert response.json()["message"] == "body must not be larger than 64 bytes"


class TestHelperEndpoints:
    """Test slug and download helpers through a running application."""

    def test_slug(self, client):
        """Test slugs are returned."""
        response = client.get("/slug/Hello World 123")
        assert response.json() == {"slug": "hello-world-123"}

    def test_slug_failure(self, client):
        """Test inputs without a slug map to 400."""
        response = client.get("/slug/こんにちは")
        assert response.status_code == 400
        assert response.json()["message"] == "after removing characters, slug is zero length"

    def test_download(self, client):
        """Test a static file is offered as an attachment."""
        response = client.get("/download/report.txt")
        assert response.status_code == 200
        assert response.headers["content-disposition"] == 'attachment; filename="report-2024.txt"'
        assert response.text == "quarterly numbers"

    def test_download_missing(self, client):
        """Test a missing file maps to 404."""
        response = client.get("/download/missing.txt")
        assert response.status_code == 404
        assert response.json() == {"error": True, "message": "file missing.txt not found"}


class TestToolkitFacade:
    """Test facade methods that need no application."""

    def test_random_string(self, toolkit):
        """Test tokens have the requested length."""
        assert len(toolkit.random_string(12)) == 12

    def test_create_dir(self, toolkit, tmp_path):
        """Test directories are created with the configured mode."""
        target = toolkit.create_dir_if_not_exist(tmp_path / "x" / "y")
        assert target.is_dir()

    def test_error_json(self, toolkit):
        """Test error envelopes from the facade."""
        response = toolkit.error_json(ValueError("bad"), status_code=422)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_push_json_to_remote(self, toolkit):
        """Test payloads are pushed through a given client."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=json.loads(request.content)))
        async with httpx.AsyncClient(transport=transport) as http_client:
            response, status = await toolkit.push_json_to_remote(
                "http://example.com/echo", Foo(foo="bar"), client=http_client
            )
        assert status == 200
        assert response.json() == {"foo": "bar"}
