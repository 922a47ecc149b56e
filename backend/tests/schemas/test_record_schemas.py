"""Record Schemas — boundary validation of publish, delete and login payloads."""

import pytest
from pydantic import ValidationError

from portfolio.schemas.records import (
    BlogCreate, DeleteRecordRequest, LoginRequest, ProjectCreate,
)


def test_blog_create_strips_fields():
    body = BlogCreate(title="  Hello ", content="\nWorld\n")
    assert body.title == "Hello"
    assert body.content == "World"


@pytest.mark.parametrize("title, content", [("", "B"), ("A", ""), ("   ", "B"), ("A", "\t")])
def test_blog_create_rejects_empty_fields(title, content):
    with pytest.raises(ValidationError):
        BlogCreate(title=title, content=content)


def test_blog_create_drops_client_supplied_id():
    body = BlogCreate.model_validate({"id": "blog_post:evil", "title": "A", "content": "B"})
    assert "id" not in body.model_dump()


def test_project_create_link_is_optional_and_unvalidated():
    assert ProjectCreate(title="A", content="B").link == ""
    assert ProjectCreate(title="A", content="B", link="not a url").link == "not a url"


def test_project_create_requires_title_and_content():
    with pytest.raises(ValidationError):
        ProjectCreate(title="", content="B", link="https://example.com")


def test_delete_request_requires_id():
    with pytest.raises(ValidationError):
        DeleteRecordRequest(id="  ")
    assert DeleteRecordRequest(id=" blog_post:abc ").id == "blog_post:abc"


def test_login_request_requires_both_fields():
    with pytest.raises(ValidationError):
        LoginRequest.model_validate({"email": "a@b.c"})
