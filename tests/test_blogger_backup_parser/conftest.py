"""Shared fixtures: synthetic Blogger backups shaped like real exports."""

import logging
from pathlib import Path
from typing import List, Optional
from xml.sax.saxutils import escape

import pytest

BLOG_ID = "tag:blogger.com,1999:blog-42"
KIND = "http://schemas.google.com/blogger/2008/kind#"

FEED_OPEN = f"""<?xml version='1.0' encoding='UTF-8'?>
<feed xmlns='http://www.w3.org/2005/Atom' xmlns:openSearch='http://a9.com/-/spec/opensearchrss/1.0/' xmlns:gd='http://schemas.google.com/g/2005' xmlns:thr='http://purl.org/syndication/thread/1.0'>
<id>{BLOG_ID}.archive</id>
<updated>2020-04-01T12:00:00.000-07:00</updated>
<title type='text'>Field Notes</title>
<link rel='http://schemas.google.com/g/2005#feed' type='application/atom+xml' href='https://www.blogger.com/feeds/42/archive'/>
<author><name>Ada</name><email>noreply@blogger.com</email></author>
<generator version='7.00' uri='https://www.blogger.com'>Blogger</generator>
"""
FEED_CLOSE = "</feed>\n"


def post_id(number: int) -> str:
    return f"{BLOG_ID}.post-{number}"


def _author(name: str) -> str:
    return (
        f"<author><name>{escape(name)}</name>"
        "<uri>https://www.blogger.com/profile/1</uri>"
        "<email>noreply@blogger.com</email>"
        "<gd:image rel='http://schemas.google.com/g/2005#thumbnail' width='16' "
        "height='16' src='https://img1.blogblog.com/img/b16-rounded.gif'/></author>"
    )


class BackupBuilder:
    """Assemble a backup feed entry by entry."""

    def __init__(self) -> None:
        self.entries: List[str] = []

    def post(
        self,
        number: int,
        published: str,
        title: str = "Title",
        content: str = "<p>Body</p>",
        author: str = "Ada",
        draft: Optional[str] = None,
    ) -> "BackupBuilder":
        control = ""
        if draft is not None:
            control = (
                "<app:control xmlns:app='http://purl.org/atom/app#'>"
                f"<app:draft>{draft}</app:draft></app:control>"
            )
        self.entries.append(f"""<entry>
<id>{post_id(number)}</id>
<published>{published}</published>
<updated>{published}</updated>
<category scheme='http://schemas.google.com/g/2005#kind' term='{KIND}post'/>
<category scheme='http://www.blogger.com/atom/ns#' term='travel'/>
<title type='text'>{escape(title)}</title>
<content type='html'>{escape(content)}</content>
<link rel='replies' type='text/html' href='https://example.blogspot.com/p{number}.html#comment-form' title='0 Comments'/>
{_author(author)}
{control}
<thr:total>0</thr:total>
</entry>
""")
        return self

    def comment(
        self,
        number: int,
        post_number: int,
        published: str,
        title: str = "Nice",
        content: str = "Nice post",
        author: str = "Reader",
    ) -> "BackupBuilder":
        self.entries.append(f"""<entry>
<id>{post_id(number)}</id>
<published>{published}</published>
<updated>{published}</updated>
<category scheme='http://schemas.google.com/g/2005#kind' term='{KIND}comment'/>
<title type='text'>{escape(title)}</title>
<content type='html'>{escape(content)}</content>
{_author(author)}
<thr:in-reply-to href='https://example.blogspot.com/p{post_number}.html' ref='{post_id(post_number)}' source='https://www.blogger.com/feeds/42/posts/default/{post_number}' type='text/html'/>
</entry>
""")
        return self

    def settings(self, name: str = "BLOG_NAME", value: str = "Field Notes") -> "BackupBuilder":
        self.entries.append(f"""<entry>
<id>{BLOG_ID}.settings.{name}</id>
<published>2020-01-01T00:00:00.000-08:00</published>
<category scheme='http://schemas.google.com/g/2005#kind' term='{KIND}settings'/>
<title type='text'></title>
<content type='text'>{escape(value)}</content>
</entry>
""")
        return self

    def template(self) -> "BackupBuilder":
        self.entries.append(f"""<entry>
<id>{BLOG_ID}.layout</id>
<published>2020-01-01T00:00:00.000-08:00</published>
<category scheme='http://schemas.google.com/g/2005#kind' term='{KIND}template'/>
<title type='text'>Template: Field Notes</title>
<content type='text'>{escape("<html><body></body></html>")}</content>
</entry>
""")
        return self

    def page(self, number: int) -> "BackupBuilder":
        """An entry of a kind the decoder does not know about."""
        self.entries.append(f"""<entry>
<id>{BLOG_ID}.page-{number}</id>
<published>2020-02-01T00:00:00.000-08:00</published>
<category scheme='http://schemas.google.com/g/2005#kind' term='{KIND}page'/>
<title type='text'>About</title>
<content type='html'>About me</content>
{_author("Ada")}
</entry>
""")
        return self

    def raw(self, markup: str) -> "BackupBuilder":
        self.entries.append(markup)
        return self

    def build(self) -> str:
        return FEED_OPEN + "".join(self.entries) + FEED_CLOSE

    def to_bytes(self) -> bytes:
        return self.build().encode("utf-8")

    def write(self, path: Path) -> Path:
        path.write_text(self.build(), encoding="utf-8")
        return path


@pytest.fixture(autouse=True)
def restore_package_log_level():
    """Decoders set the package logger level; undo it after each test."""
    logger = logging.getLogger("blogger_backup_parser")
    level = logger.level
    yield
    logger.setLevel(level)


@pytest.fixture
def backup_builder() -> BackupBuilder:
    """An empty backup to fill in per test."""
    return BackupBuilder()


@pytest.fixture
def sample_builder() -> BackupBuilder:
    """Three posts, one draft, four comments of which one is orphaned."""
    return (
        BackupBuilder()
        .settings()
        .template()
        .post(100, "2020-01-02T10:00:00.000-08:00", title="Second post")
        .post(200, "2019-12-31T09:30:00.001+00:00", title="First post")
        .post(300, "2020-03-01T00:00:00Z", title="Unfinished", draft="yes")
        .comment(9001, 100, "2020-01-03T08:00:00.000-08:00", content="Great read")
        .comment(9002, 100, "2020-01-02T12:00:00.000-08:00", content="First!")
        .comment(9003, 200, "2020-01-01T00:00:00.000+00:00")
        .comment(9004, 999, "2020-01-05T00:00:00.000+00:00")
    )


@pytest.fixture
def sample_backup_file(tmp_path: Path, sample_builder: BackupBuilder) -> Path:
    return sample_builder.write(tmp_path / "backup.xml")
