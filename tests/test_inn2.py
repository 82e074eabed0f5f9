import os
import ssl

import pytest

import nntpstream
from nntpstream.types import GroupPermission

HOST = os.environ.get("NNTPSTREAM_TEST_HOST", "")

pytestmark = pytest.mark.skipif(not HOST, reason="NNTPSTREAM_TEST_HOST is not set")

DEFAULT_NEWGROUPS = {
    ("control", "Various control messages (no posting)"),
    ("control.cancel", "Cancel messages (no posting)"),
    ("control.checkgroups", "Hierarchy check control messages (no posting)"),
    ("control.newgroup", "Newsgroup creation control messages (no posting)"),
    ("control.rmgroup", "Newsgroup removal control messages (no posting)"),
    ("junk", "Unfiled articles (no posting)"),
    ("local.general", "Local general group"),
    ("local.test", "Local test group"),
}


def test_nntp_client() -> None:
    nntp_client = nntpstream.NNTPClient.connect(HOST)
    newsgroups = set(nntp_client.list_newsgroups())
    assert newsgroups == DEFAULT_NEWGROUPS
    nntp_client.close()


def test_context_manager() -> None:
    """
    https://docs.python.org/3/reference/datamodel.html#context-managers
    """
    with nntpstream.NNTPClient.connect(HOST) as nntp_client:
        newsgroups = set(nntp_client.list_newsgroups())
        assert newsgroups == DEFAULT_NEWGROUPS


def test_context_manager_on_close() -> None:
    """
    nntp_client.close() may be called within the context manager.
    """
    with nntpstream.NNTPClient.connect(HOST) as nntp_client:
        newsgroups = set(nntp_client.list_newsgroups())
        assert newsgroups == DEFAULT_NEWGROUPS
        nntp_client.close()


def test_context_manager_on_quit() -> None:
    """
    nntp_client.quit() may be called within the context manager.
    """
    with nntpstream.NNTPClient.connect(HOST) as nntp_client:
        newsgroups = set(nntp_client.list_newsgroups())
        assert newsgroups == DEFAULT_NEWGROUPS
        nntp_client.quit()


@pytest.mark.xfail(
    reason="INN2 in not configured to support SSL",
    raises=ssl.SSLError,
    strict=True,
)
def test_nntp_client_with_ssl() -> None:
    with nntpstream.NNTPClient.connect(HOST, use_ssl=True) as nntp_client:
        newsgroups = set(nntp_client.list_newsgroups())
        assert newsgroups == DEFAULT_NEWGROUPS


@pytest.mark.parametrize(
    "newsgroup",
    [
        "local.general",
        "local.test",
        pytest.param(
            "junk",
            marks=pytest.mark.xfail(raises=nntpstream.NNTPTemporaryError, strict=True),
        ),
    ],
)
def test_post(newsgroup: str) -> None:
    article = nntpstream.Article(
        header={
            "Subject": f"Test post to {newsgroup}",
            "From": "GitHub Actions <actions@github.com>",
            "Newsgroups": newsgroup,
        },
        body=f"This is a test post to {newsgroup}",
    )
    with nntpstream.NNTPClient.connect(HOST) as nntp_client:
        assert nntp_client.post(article)


@pytest.mark.parametrize("newsgroup", ["local.general", "local.test", "junk"])
def test_list_active(newsgroup: str) -> None:
    with nntpstream.NNTPClient.connect(HOST) as nntp_client:
        groups = nntp_client.list_active(newsgroup)
        for name, high, low, permission in groups:
            assert name == newsgroup
            assert isinstance(permission, GroupPermission)


@pytest.mark.parametrize("newsgroup", ["local.general", "local.test"])
def test_article(newsgroup: str) -> None:
    with nntpstream.NNTPClient.connect(HOST) as nntp_client:
        total, first, last, group = nntp_client.group(newsgroup)
        assert group == newsgroup
        assert total >= 1
        with nntp_client.article(number=first) as article:
            assert article.number == first
            assert article.header["Newsgroups"] == newsgroup
            assert article.read().startswith(b"This is a test post to ")


def test_date_and_capabilities() -> None:
    with nntpstream.NNTPClient.connect(HOST, reader=True) as nntp_client:
        assert nntp_client.capabilities()[0].startswith("VERSION")
        assert nntp_client.date().tzinfo is not None
