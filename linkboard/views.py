"""Typed view models, one per template, and the function that renders them."""
from dataclasses import dataclass, field, fields
from typing import ClassVar, List

from flask import make_response, render_template
from jinja2 import TemplateError

from linkboard.errors import RenderError
from linkboard.repositories import CommentRecord, PostRecord


@dataclass
class IndexView:
    template: ClassVar[str] = "index.html"

    posts: List[PostRecord] = field(default_factory=list)


@dataclass
class PostDetailView:
    template: ClassVar[str] = "post_detail.html"

    post: PostRecord
    comments: List[CommentRecord] = field(default_factory=list)


def render(view):
    # ClassVar attributes are not dataclass fields, so only the view data is passed
    context = {f.name: getattr(view, f.name) for f in fields(view)}
    try:
        html = render_template(view.template, **context)
    except TemplateError as e:
        raise RenderError(str(e) or repr(e)) from e
    response = make_response(html)
    response.headers["Content-Type"] = "text/html; charset=utf-8"
    return response
