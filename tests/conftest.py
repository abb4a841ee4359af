"""Pytest configuration and fixtures for Trellis tests."""

import pytest

from trellis import DictLoader, Environment, Syntax


@pytest.fixture
def env():
    """Create a basic Trellis Environment."""
    return Environment()


@pytest.fixture
def custom_env():
    """Create an Environment with an ERB-style syntax as its default."""
    return Environment(
        {
            "erb": Syntax(
                block_start="<%",
                block_end="%>",
                expr_start="[[",
                expr_end="]]",
                comment_start="<#",
                comment_end="#>",
            )
        },
        default_syntax="erb",
    )


@pytest.fixture
def env_with_loader():
    """Create an Environment with a DictLoader and a few templates."""
    loader = DictLoader(
        {
            "base.html": (
                "<html>"
                "<head>{% block head %}{% endblock %}</head>"
                "<body>{% block body %}{% endblock %}</body>"
                "</html>"
            ),
            "child.html": '{% extends "base.html" %}{% block body %}Hello{% endblock %}',
            "partial.html": "<p>Partial content</p>",
            "macros.html": "{% macro greet(name) %}Hello {{ name }}{% endmacro %}",
        }
    )
    return Environment(loader=loader)
