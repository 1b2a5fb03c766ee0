"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_POST = """\
---
layout: post
title: "Gulp: a streaming build system"
description: Notes on task runners
tag: tooling
---
<p>Install it first:</p>
{% highlight bash %}
npm install --save-dev gulp
{% endhighlight %}
<p>A task that echoes template syntax:</p>
{% raw %}
{% highlight js %}
gulp.task('html', () => render('{{ page.title }}'));
{% endhighlight %}
{% endraw %}
<p>Done.</p>
"""

NESTED_EXAMPLE = (
    "---\ntitle: A\n---\nhello {% raw %}{% highlight x %}\nraw\n"
    "{% endhighlight %}{% endraw %} world"
)


@pytest.fixture(name="sample_post")
def sample_post_fixture():
    return SAMPLE_POST


@pytest.fixture(name="nested_example")
def nested_example_fixture():
    return NESTED_EXAMPLE


@pytest.fixture(name="posts_dir")
def posts_dir_fixture(tmp_path):
    """A small corpus: one valid post, one broken post, one ignored file."""
    root = tmp_path / "_posts"
    root.mkdir()
    (root / "2017-05-01-Gulp Tooling.html").write_text(SAMPLE_POST, encoding="utf-8")
    (root / "2018-01-12-broken.md").write_text(
        "---\ntitle: Broken\n---\n{% highlight cpp %}\nint x;\n", encoding="utf-8"
    )
    (root / "notes.txt").write_text("not a post", encoding="utf-8")
    return root
