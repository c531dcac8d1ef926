import pytest
from fastapi import FastAPI, HTTPException, Request
from fastapi.testclient import TestClient

from jsonapi_doc.codec import decode_document
from jsonapi_doc.core import DocumentBuilder, ResourceBuilder
from jsonapi_doc.middleware import ContentNegotiationMiddleware, ErrorHandlerMiddleware
from jsonapi_doc.responses import JSONAPIResponse, install_exception_handlers
from jsonapi_doc.schemas import HttpStatus, Resource

MEDIA_TYPE = "application/vnd.api+json"


@pytest.fixture
def app():
    app = FastAPI()
    app.add_middleware(ContentNegotiationMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    install_exception_handlers(app)

    @app.get("/posts/{post_id}")
    async def get_post(post_id: str):
        if post_id == "404":
            raise HTTPException(status_code=404, detail="post 404 not found")
        return JSONAPIResponse(DocumentBuilder.for_resource(ResourceBuilder("posts", post_id)))

    @app.post("/posts")
    async def create_post(request: Request):
        document = decode_document(await request.body())
        return JSONAPIResponse(
            DocumentBuilder.for_resource(ResourceBuilder.from_entity(document.data).with_id("1")),
            status_code=HttpStatus.CREATED,
        )

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    @app.get("/broken")
    async def broken():
        return JSONAPIResponse(DocumentBuilder.for_resource(ResourceBuilder("")))

    @app.get("/plain")
    async def plain():
        return JSONAPIResponse({"meta": {"ok": True}})

    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def errors_of(response):
    assert response.headers["content-type"] == MEDIA_TYPE
    return response.json()["errors"]


def test_document_response(client):
    response = client.get("/posts/1", headers={"Accept": MEDIA_TYPE})

    assert response.status_code == 200
    assert response.headers["content-type"] == MEDIA_TYPE
    assert decode_document(response.content).data == Resource(type_="posts", id="1")


def test_plain_mapping_response(client):
    assert client.get("/plain").json() == {"meta": {"ok": True}}


def test_post_round_trip(client):
    response = client.post(
        "/posts",
        content=b'{"data": {"type": "posts", "attributes": {"title": "Hi"}}}',
        headers={"Content-Type": MEDIA_TYPE},
    )

    assert response.status_code == 201
    assert response.json()["data"]["id"] == "1"
    assert response.json()["data"]["attributes"] == {"title": "Hi"}


@pytest.mark.parametrize("content_type", ["application/json", f"{MEDIA_TYPE}; charset=utf-8", ""])
def test_unsupported_media_type(client, content_type):
    response = client.post("/posts", content=b"{}", headers={"Content-Type": content_type})

    assert response.status_code == 415
    (error,) = errors_of(response)
    assert error["status"] == "415"
    assert error["title"] == "Unsupported Media Type"


def test_ext_and_profile_are_accepted(client):
    response = client.post(
        "/posts",
        content=b'{"data": {"type": "posts"}}',
        headers={"Content-Type": f'{MEDIA_TYPE}; profile="http://example.com/p"'},
    )

    assert response.status_code == 201


@pytest.mark.parametrize("accept", ["text/html", f"{MEDIA_TYPE}; foo=bar", f"{MEDIA_TYPE}; charset=utf-8"])
def test_not_acceptable(client, accept):
    response = client.get("/posts/1", headers={"Accept": accept})

    assert response.status_code == 406
    assert errors_of(response)[0]["status"] == "406"


@pytest.mark.parametrize(
    "accept",
    [
        f'{MEDIA_TYPE}; profile="http://example.com/p"',
        f"{MEDIA_TYPE}; q=0.9",
        f"{MEDIA_TYPE}; foo=bar, {MEDIA_TYPE}",
        "application/*",
    ],
)
def test_acceptable_entries(client, accept):
    response = client.get("/posts/1", headers={"Accept": accept})

    assert response.status_code == 200


def test_http_exception_becomes_error_document(client):
    response = client.get("/posts/404")

    assert response.status_code == 404
    (error,) = errors_of(response)
    assert error["title"] == "Not Found"
    assert error["detail"] == "post 404 not found"


def test_unknown_route(client):
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert errors_of(response)[0]["status"] == "404"


def test_decode_error_is_bad_request(client):
    response = client.post(
        "/posts",
        content=b'{"data": {"id": "1"}}',
        headers={"Content-Type": MEDIA_TYPE},
    )

    assert response.status_code == 400
    (error,) = errors_of(response)
    assert error["code"] == "MissingField"
    assert error["meta"] == {"path": "data.type"}


def test_build_error_is_server_error(client):
    response = client.get("/broken")

    assert response.status_code == 500
    assert errors_of(response)[0]["status"] == "500"


def test_unhandled_exception(client):
    response = client.get("/boom")

    assert response.status_code == 500
    (error,) = errors_of(response)
    assert error["title"] == "Internal Server Error"
    assert error["detail"] is None
