import json

import pytest

from jsonapi_doc.config import get_settings

POST_DOCUMENT = {
    "jsonapi": {"version": "1.1", "meta": {"implementation": "jsonapi_doc"}},
    "meta": {"copyright": "Example Corp."},
    "links": {
        "self": "http://example.com/posts/1",
        "describedby": {"href": "http://example.com/schemas/posts", "meta": {"v": 2}},
    },
    "data": {
        "type": "posts",
        "id": "1",
        "attributes": {"title": "Hello", "tags": ["a", "b"], "draft": False},
        "relationships": {
            "author": {
                "links": {
                    "self": "http://example.com/posts/1/relationships/author",
                    "related": "http://example.com/posts/1/author",
                },
                "data": {"type": "users", "id": "9"},
            },
            "comments": {"data": [{"type": "comments", "id": "5"}, {"type": "comments", "id": "12"}]},
        },
        "links": {"self": "http://example.com/posts/1"},
        "meta": {"views": 10},
    },
}

ERROR_DOCUMENT = {
    "errors": [
        {
            "id": "e1",
            "status": "422",
            "code": "too-short",
            "title": "Invalid Attribute",
            "detail": "Title must contain at least three characters.",
            "source": {"pointer": "/data/attributes/title"},
            "links": {"about": "http://example.com/errors/too-short"},
            "meta": {"minimum": 3},
        }
    ]
}


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Drop cached settings so each test sees its own environment."""
    for name in ("JSONAPI_MAX_DEPTH", "JSONAPI_MEDIA_TYPE", "JSONAPI_CLIENT_PATH_SUFFIX"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def post_payload():
    return json.loads(json.dumps(POST_DOCUMENT))


@pytest.fixture
def post_raw():
    return json.dumps(POST_DOCUMENT).encode()


@pytest.fixture
def error_raw():
    return json.dumps(ERROR_DOCUMENT).encode()
