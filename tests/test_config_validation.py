from pathlib import Path

import pytest

from postscaffold.categories import Category
from postscaffold.config import ConfigError, ScaffoldConfig, load_config, resolve_config


def test_defaults_match_builtin_table(blog_repo: Path) -> None:
    config = resolve_config(blog_repo)

    assert config == ScaffoldConfig()
    assert config.default_branch == "master"
    assert config.category_spec("article").path_template == "article/{year}/{slug}/"


def test_rejects_unknown_keys(write_config) -> None:
    path = write_config(
        """
        default_branch = "main"
        unexpected = "nope"
        """
    )

    with pytest.raises(ConfigError) as exc:
        load_config(path)

    assert "extra" in str(exc.value).lower()


def test_rejects_invalid_toml(write_config) -> None:
    path = write_config('default_branch = "main')

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.toml")


def test_category_overrides(write_config) -> None:
    path = write_config(
        """
        [[category]]
        name = "article"
        path = "posts/{year}/{slug}/index.md"

        [[category]]
        name = "how-to"
        branch_prefix = "howto"
        kind = "guide"
        """
    )

    config = load_config(path)

    article = config.category_spec(Category.ARTICLE)
    assert article.path_template == "posts/{year}/{slug}/index.md"
    assert article.branch_prefix == "article"

    how_to = config.category_spec("how-to")
    assert how_to.branch_name("x") == "howto/x"
    assert how_to.kind == "guide"


def test_rejects_plural_category_table(write_config) -> None:
    path = write_config(
        """
        [[categories]]
        name = "article"
        """
    )

    with pytest.raises(ConfigError, match=r"\[\[category\]\]"):
        load_config(path)


def test_rejects_unknown_category(write_config) -> None:
    path = write_config(
        """
        [[category]]
        name = "podcast"
        kind = "podcast"
        """
    )

    with pytest.raises(ConfigError, match="Unknown category"):
        load_config(path)


@pytest.mark.parametrize("template", ["posts/{title}", "posts/no-slug", "posts/{slug"])
def test_rejects_bad_path_templates(write_config, template: str) -> None:
    path = write_config(
        f"""
        [[category]]
        name = "what-is"
        path = "{template}"
        """
    )

    with pytest.raises(ConfigError):
        load_config(path)


def test_rejects_duplicate_overrides(write_config) -> None:
    path = write_config(
        """
        [[category]]
        name = "cstip"
        kind = "a"

        [[category]]
        name = "CSHARP_TIP"
        kind = "b"
        """
    )

    with pytest.raises(ConfigError, match="more than once"):
        load_config(path)


def test_environment_overrides_file(blog_repo: Path, write_config, monkeypatch: pytest.MonkeyPatch) -> None:
    write_config(
        """
        default_branch = "main"
        hugo = "hugo-extended"
        """
    )
    monkeypatch.setenv("SCAFFOLD_DEFAULT_BRANCH", "trunk")
    monkeypatch.setenv("SCAFFOLD_GIT", "/opt/git/bin/git")

    config = resolve_config(blog_repo)

    assert config.default_branch == "trunk"
    assert config.git == "/opt/git/bin/git"
    assert config.hugo == "hugo-extended"


def test_blank_environment_override_is_ignored(blog_repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCAFFOLD_HUGO", "")

    assert resolve_config(blog_repo).hugo == "hugo"


def test_explicit_config_path_wins_over_repo_file(blog_repo: Path, write_config) -> None:
    write_config('default_branch = "main"')
    other = write_config('default_branch = "develop"', name="other.toml")

    assert resolve_config(blog_repo, other).default_branch == "develop"
