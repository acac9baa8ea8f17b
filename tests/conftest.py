"""Shared fixtures: a small content schema written to ``tmp_path``."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from headless_frontend.schema import load_schema

if typ.TYPE_CHECKING:
    from pathlib import Path

    from headless_frontend.schema import Schema

SCHEMA_YAML = """
content_types:
  news:
    api_endpoint: posts
    source_content_type: post
    taxonomies:
      - categories
    content_fields: news.yaml
  page:
    api_endpoint: pages
    content_fields: page.yaml
global:
  precision: 3
  round: even
"""

NEWS_FIELDS_YAML = """
intro:
  type: plaintext
body:
  type: richtext
subtitle:
  type: text
rating:
  type: number
price:
  type: decimal
  precision: 1
  round: down
weight:
  type: decimal
featured:
  type: boolean
event_date:
  type: date
  format: "%Y%m%d"
tags:
  type: plainarray
people:
  type: array
  content_fields:
    name:
      type: text
    role:
      type: text
blocks:
  type: flexible
  components:
    text_block:
      content:
        type: richtext
    quote:
      quote_text:
        type: plaintext
      author:
        type: text
hero:
  type: image
related:
  type: relation_array
  content_type: news
"""

PAGE_FIELDS_YAML = """
summary:
  config: fields/summary.yaml
"""

SUMMARY_FIELD_YAML = """
type: plaintext
"""


def write_schema(tmp_path: Path) -> Path:
    """Write the sample schema files and return the root schema path."""
    (tmp_path / "fields").mkdir(exist_ok=True)
    files = {
        "content.yaml": SCHEMA_YAML,
        "news.yaml": NEWS_FIELDS_YAML,
        "page.yaml": PAGE_FIELDS_YAML,
        "fields/summary.yaml": SUMMARY_FIELD_YAML,
    }
    for name, text in files.items():
        (tmp_path / name).write_text(dedent(text).strip() + "\n", encoding="utf-8")
    return tmp_path / "content.yaml"


@pytest.fixture
def schema_path(tmp_path: Path) -> Path:
    """Return the path of a freshly written sample schema."""
    return write_schema(tmp_path)


@pytest.fixture
def schema(schema_path: Path) -> Schema:
    """Return the loaded sample schema."""
    return load_schema(schema_path)
