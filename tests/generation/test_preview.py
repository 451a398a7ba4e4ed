from github_readme_generator.generation.preview import render_readme_html


def test_render_headings_with_anchors():
    html = render_readme_html("# widget\n\n## Getting Started\n\nHello.")

    assert '<h1 id="widget">widget</h1>' in html
    assert '<h2 id="getting-started">Getting Started</h2>' in html
    assert "<p>Hello.</p>" in html


def test_render_fenced_code():
    html = render_readme_html("```bash\nnpm install\n```")

    assert '<code class="language-bash">npm install' in html


def test_render_tables():
    html = render_readme_html("| a | b |\n|---|---|\n| 1 | 2 |")

    assert "<table>" in html
    assert "<td>1</td>" in html


def test_render_empty_document():
    assert render_readme_html("") == ""
