import datetime as dt
import json
import logging

from gitfolio.models import Settings
from gitfolio.services import seo_service

from conftest import make_repo, make_user_data


def structured_payload(document):
    start = document.index('<script type="application/ld+json">') + len('<script type="application/ld+json">')
    end = document.index("</script>", start)
    return json.loads(document[start:end])


def test_description_prefers_settings_bio_then_profile_then_default():
    user_data = make_user_data([make_repo("a")], bio="Profile bio")
    assert seo_service.meta_description(user_data, Settings(bio="Custom")) == "Custom"
    assert seo_service.meta_description(user_data, Settings()) == "Profile bio"
    bare = make_user_data([make_repo("a")])
    assert seo_service.meta_description(bare, Settings()) == "The Octocat's developer portfolio"


def test_description_is_capped_at_155_characters():
    text = seo_service.meta_description(make_user_data([make_repo("a")]), Settings(bio="x" * 200))
    assert len(text) == 155
    assert text.endswith("...")
    assert seo_service.meta_description(make_user_data([make_repo("a")]), Settings(bio="y" * 155)) == "y" * 155


def test_keywords_cap_languages_and_repository_names():
    repos = [make_repo(f"repo-{i}", language_data={f"Lang{i}": 10, "Python": 5}) for i in range(12)]
    keywords = seo_service.keywords(make_user_data(repos))
    assert keywords[:2] == ["developer", "portfolio"]
    languages = keywords[2:-5]
    assert len(languages) == 10
    assert languages.count("Python") == 1
    assert keywords[-5:] == ["repo-0", "repo-1", "repo-2", "repo-3", "repo-4"]


def test_unenriched_repositories_contribute_primary_language():
    repos = [make_repo("a", language_data={"Go": 1}), make_repo("b", language="Ruby"), make_repo("c")]
    assert seo_service.keyword_languages(make_user_data(repos)) == ["Go", "Ruby"]
    assert seo_service.skills(make_user_data(repos)) == ["Go"]


def test_skills_are_capped_at_fifteen():
    repos = [make_repo(f"r{i}", language_data={f"L{i}": 1}) for i in range(20)]
    assert len(seo_service.skills(make_user_data(repos))) == 15


def test_meta_tags_escape_values():
    user_data = make_user_data([make_repo("a")], name='Mona "The" <Cat>')
    tags = seo_service.generate_meta_tags(user_data, Settings())
    assert 'content="Mona &quot;The&quot; &lt;Cat&gt;"' in tags
    assert 'property="og:url" content="https://github.com/octocat"' in tags


def test_meta_tags_without_snapshot_are_empty():
    assert seo_service.generate_meta_tags(None, Settings()) == ""
    assert seo_service.generate_structured_data(None, Settings()) == ""
    assert seo_service.generate_sitemap(None) == ""


def test_structured_data_person():
    user_data = make_user_data([make_repo("a", language_data={"Go": 1})], location="Berlin")
    settings = Settings(linkedin="https://linkedin.com/in/mona", twitter="@mona", email="mona@example.com")
    data = seo_service.structured_data(user_data, settings)
    assert data["@type"] == "Person"
    assert data["sameAs"] == [
        "https://github.com/octocat",
        "https://linkedin.com/in/mona",
        "https://twitter.com/mona",
    ]
    assert data["knowsAbout"] == ["Go"]
    assert data["email"] == "mona@example.com"
    assert data["address"] == {"@type": "PostalAddress", "addressLocality": "Berlin"}


def test_structured_data_omits_optional_fields():
    data = seo_service.structured_data(make_user_data([make_repo("a")]), Settings())
    assert "email" not in data
    assert "address" not in data
    assert data["sameAs"] == ["https://github.com/octocat"]


def test_structured_data_cannot_close_its_script_tag():
    settings = Settings(bio="</script><script>alert(1)</script>")
    block = seo_service.generate_structured_data(make_user_data([make_repo("a")]), settings)
    assert block.count("</script>") == 1
    assert structured_payload(block)["description"] == settings.bio


def test_sitemap_uses_profile_url_and_date():
    sitemap = seo_service.generate_sitemap(make_user_data([make_repo("a")]), today=dt.date(2024, 3, 9))
    assert "<loc>https://github.com/octocat</loc>" in sitemap
    assert "<lastmod>2024-03-09</lastmod>" in sitemap


def test_robots_allows_everything():
    assert seo_service.generate_robots_txt().startswith("User-agent: *\nAllow: /")


def test_injection_adds_metadata_and_structured_data():
    document = "<html><head><title>x</title></head><body><p>hi</p></body></html>"
    result = seo_service.inject_into_html(document, make_user_data([make_repo("a")]), Settings())
    head, body = result.split("</head>")
    assert '<meta name="description"' in head
    assert body.index('<script type="application/ld+json">') < body.index("</body>")


def test_missing_head_leaves_document_unchanged(caplog):
    document = "<html><body>no head here</body></html>"
    with caplog.at_level(logging.WARNING):
        result = seo_service.inject_into_html(document, make_user_data([make_repo("a")]), Settings())
    assert result == document
    assert "</head>" in caplog.text


def test_missing_body_keeps_metadata_only(caplog):
    document = "<html><head></head><main>x</main></html>"
    with caplog.at_level(logging.WARNING):
        result = seo_service.inject_into_html(document, make_user_data([make_repo("a")]), Settings())
    assert '<meta name="description"' in result
    assert "application/ld+json" not in result
    assert "structured data not injected" in caplog.text
