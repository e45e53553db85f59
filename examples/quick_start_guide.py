#!/usr/bin/env python3
"""
Quick Start Guide for the Blogger Backup Parser.

Decodes a backup, prints each post with its comments and reports anything the
decoder had to set aside.

Usage:
    python quick_start_guide.py                      # Use a small built-in backup
    python quick_start_guide.py <path/to/backup.xml> # Decode an exported backup
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from blogger_backup_parser import BloggerBackupParser, DecoderConfig
from blogger_backup_parser.tools import inspection

SAMPLE_BACKUP = b"""<?xml version='1.0' encoding='UTF-8'?>
<feed xmlns='http://www.w3.org/2005/Atom' xmlns:thr='http://purl.org/syndication/thread/1.0'>
<id>tag:blogger.com,1999:blog-1.archive</id>
<title type='text'>Example Blog</title>
<entry>
<id>tag:blogger.com,1999:blog-1.post-10</id>
<published>2020-01-01T09:00:00.000-08:00</published>
<category scheme='http://schemas.google.com/g/2005#kind' term='http://schemas.google.com/blogger/2008/kind#post'/>
<title type='text'>Hello world</title>
<content type='html'>&lt;p&gt;First!&lt;/p&gt;</content>
<author><name>Ada</name></author>
</entry>
<entry>
<id>tag:blogger.com,1999:blog-1.post-11</id>
<published>2020-01-02T10:00:00.000-08:00</published>
<category scheme='http://schemas.google.com/g/2005#kind' term='http://schemas.google.com/blogger/2008/kind#comment'/>
<title type='text'>Welcome</title>
<content type='html'>Welcome to blogging</content>
<author><name>Grace</name></author>
<thr:in-reply-to ref='tag:blogger.com,1999:blog-1.post-10' type='text/html'/>
</entry>
</feed>
"""


def quick_start_example(source):
    """Decode a backup and summarise it."""

    print("🚀 QUICK START - Blogger Backup Parser")
    print("=" * 40)

    # Step 1: Decode
    print("\n📄 Step 1: Decoding")
    print("-" * 30)

    parser = BloggerBackupParser(DecoderConfig(name="quick-start"))
    result = parser.decode_with_report(source)

    print(f"✅ Posts: {result.post_count}, comments: {result.comment_count}")
    print(f"⏱️  Took {result.metrics.processing_time_ms:.1f} ms")

    # Step 2: Posts in publication order
    print("\n📰 Step 2: Posts")
    print("-" * 30)

    for post in result.posts:
        draft = " (draft)" if post.draft else ""
        print(f"  {post.published:%Y-%m-%d} {post.title}{draft} by {post.author_name}")
        for comment in post.comments:
            print(f"    💬 {comment.author_name}: {comment.title}")

    # Step 3: Anything set aside
    print("\n⚠️  Step 3: Diagnostics")
    print("-" * 30)

    if not result.diagnostics:
        print("  Nothing to report")
    for diagnostic in result.diagnostics:
        print(f"  - {diagnostic.severity.name}: {diagnostic.message} {diagnostic.details}")

    # Step 4: Structure
    print("\n🔍 Step 4: Element paths")
    print("-" * 30)

    for path in inspection.paths(source):
        print(f"  {path}")


if __name__ == "__main__":
    if len(sys.argv) > 1:
        backup = Path(sys.argv[1])
        if not backup.exists():
            print(f"Error: File '{backup}' not found")
            sys.exit(1)
    else:
        backup = SAMPLE_BACKUP
    quick_start_example(backup)
