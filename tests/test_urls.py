import pytest

from fpcli.urls import NotebookUrlBuilder, slugify

WORKSPACE = "JwpDrHrlS-OWjxYXe9gJ2g"
NOTEBOOK = "ftTv2S3yRPyJyQQbopXonQ"


def test_notebook_url_builder_everything():
    url = (
        NotebookUrlBuilder(WORKSPACE, NOTEBOOK)
        .base_url("https://dev.fiberplane.io")
        .title("Reported issues on API")
        .cell_id("dNJvBmg90N-dR_6iZV99LQ")
        .url()
    )
    assert url == (
        "https://dev.fiberplane.io/workspaces/JwpDrHrlS-OWjxYXe9gJ2g/notebooks/"
        "Reported-issues-on-API-ftTv2S3yRPyJyQQbopXonQ#dNJvBmg90N-dR_6iZV99LQ"
    )


def test_notebook_url_builder_minimum():
    url = NotebookUrlBuilder(WORKSPACE, NOTEBOOK).url()
    assert url == (
        "https://studio.fiberplane.com/workspaces/JwpDrHrlS-OWjxYXe9gJ2g/notebooks/"
        "ftTv2S3yRPyJyQQbopXonQ"
    )


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("title", "title"),
        ("title   title", "title-title"),
        ("title 😁 title", "title-title"),
        ("title---title", "title-title"),
        ("title-----title", "title-title"),
    ],
)
def test_slugify(text, expected):
    assert slugify(text) == expected


def test_slugify_drops_apostrophes():
    assert slugify("Bob's notebook") == "Bobs-notebook"


def test_builder_is_not_mutated_by_options():
    builder = NotebookUrlBuilder(WORKSPACE, NOTEBOOK)
    builder.cell_id("abc")
    assert "#" not in builder.url()


def test_base_url_with_path_keeps_it():
    url = NotebookUrlBuilder(WORKSPACE, NOTEBOOK).base_url("https://example.com/app").url()
    assert url == f"https://example.com/app/workspaces/{WORKSPACE}/notebooks/{NOTEBOOK}"