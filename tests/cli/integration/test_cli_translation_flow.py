"""End-to-end CLI tests against the bundled sample schema and document."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner
from payload_translate import cli as cli_module
from payload_translate.cli import cli, main


def _samples_dir() -> Path:
    return Path(__file__).resolve().parents[3] / "samples"


class UppercasingProvider:
    instances: list[UppercasingProvider] = []

    def __init__(self, api_key: str, **options: object) -> None:
        self.api_key = api_key
        self.options = options
        self.calls: list[tuple[list[str], str, str]] = []
        UppercasingProvider.instances.append(self)

    def translate(self, texts, source_locale: str, target_locale: str) -> list[str]:
        self.calls.append((list(texts), source_locale, target_locale))
        return [text.upper() for text in texts]


@pytest.fixture(name="workspace")
def fixture_workspace(tmp_path: Path) -> Path:
    shutil.copytree(_samples_dir() / "documents", tmp_path / "documents")
    (tmp_path / "config.yaml").write_text(
        "\n".join(
            [
                "provider:",
                "  gemini:",
                "    api_key: test-key",
                "    model: gemini-test",
                "store:",
                "  files:",
                "    root: documents",
                "collections:",
                "  posts:",
                "    schema:",
                f"      path: {_samples_dir() / 'posts-schema.yaml'}",
                "",
            ]
        ),
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture(autouse=True)
def _fake_provider(monkeypatch) -> None:
    UppercasingProvider.instances = []
    monkeypatch.setattr(cli_module, "GeminiTranslationProvider", UppercasingProvider)


def test_generate_config_command_writes_placeholder_file_with_default_name(tmp_path: Path) -> None:
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=str(tmp_path)):
        result = runner.invoke(cli, ["generate-config"])
        output_path = Path("config.yaml").resolve()

        assert result.exit_code == 0
        content = output_path.read_text(encoding="utf-8")
        assert "gemini:" in content
        assert "collections:" in content
        assert "<REQUIRED>" in content
        assert str(output_path) in result.output


def test_extract_prints_fragments_in_document_order(workspace: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "extract",
            "--config",
            str(workspace / "config.yaml"),
            "--collection",
            "posts",
            "--id",
            "1",
            "--locale",
            "en",
        ],
    )

    assert result.exit_code == 0, result.output
    fragments = json.loads(result.output)
    assert [fragment["path"] for fragment in fragments] == [
        "title",
        "excerpt",
        "content",
        "content",
        "content",
        "seo.metaTitle",
        "highlights.0.label",
        "highlights.1.label",
        "sidebar.heading",
        "layout.0.heading",
        "layout.0.body",
        "layout.2.quote",
    ]
    assert fragments[2] == {
        "path": "content",
        "type": "richTextFragment",
        "value": "Welcome to ",
        "lexicalPath": "root.children.0.children.0",
    }
    assert all(fragment["value"] != "https://example.com" for fragment in fragments)


@pytest.mark.parametrize(
    ("path_prefix", "expected_paths"),
    [
        ("layout", ["layout.0.heading", "layout.0.body", "layout.2.quote"]),
        ("highlights.1", ["highlights.1.label"]),
        ("layout.1", []),
    ],
)
def test_extract_limits_output_to_path_prefix(
    workspace: Path, path_prefix: str, expected_paths: list[str]
) -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "extract",
            "--config",
            str(workspace / "config.yaml"),
            "--collection",
            "posts",
            "--id",
            "1",
            "--locale",
            "en",
            "--path",
            path_prefix,
        ],
    )

    assert result.exit_code == 0, result.output
    assert [fragment["path"] for fragment in json.loads(result.output)] == expected_paths


def test_translate_writes_each_target_locale(workspace: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "translate",
            "--config",
            str(workspace / "config.yaml"),
            "--collection",
            "posts",
            "--id",
            "1",
            "--source",
            "en",
            "--target",
            "de",
            "--target",
            "fr",
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "success": True,
        "translatedFields": 24,
        "translatedLocales": 2,
        "message": "Successfully translated 24 field(s) into 2 locale(s)",
    }

    provider = UppercasingProvider.instances[0]
    assert provider.api_key == "test-key"
    assert provider.options["model"] == "gemini-test"
    assert [call[2] for call in provider.calls] == ["de", "fr"]

    german = json.loads((workspace / "documents" / "posts" / "1" / "de.json").read_text("utf-8"))
    paragraph = german["content"]["root"]["children"][0]["children"]
    assert german["title"] == "HELLO WORLD"
    assert german["slug"] == "hello-world"
    assert [node.get("text") for node in paragraph[:3]] == ["WELCOME TO ", "OUR BLOG", ". SEE "]
    assert paragraph[1]["format"] == 1
    assert paragraph[3]["children"][0]["text"] == "https://example.com"
    assert german["layout"][1] == {"blockType": "legacyBanner", "heading": "Old banner"}
    assert german["layout"][2]["attribution"] == "Austin Freeman"
    assert "id" not in german
    assert "createdAt" not in german
    assert "id" not in german["highlights"][0]

    source = json.loads((workspace / "documents" / "posts" / "1" / "en.json").read_text("utf-8"))
    assert source["title"] == "Hello World"


def test_translate_reports_disabled_configuration(workspace: Path, capsys) -> None:
    config_path = workspace / "config.yaml"
    config_path.write_text(
        "disabled: true\n" + config_path.read_text(encoding="utf-8"), encoding="utf-8"
    )

    exit_code = main(
        [
            "translate",
            "--config",
            str(config_path),
            "--collection",
            "posts",
            "--id",
            "1",
            "--source",
            "en",
            "--target",
            "de",
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Translation is disabled" in captured.err
    assert UppercasingProvider.instances == []


def test_translate_failure_payload_is_printed_before_exit(workspace: Path, capsys) -> None:
    exit_code = main(
        [
            "translate",
            "--config",
            str(workspace / "config.yaml"),
            "--collection",
            "posts",
            "--id",
            "404",
            "--source",
            "en",
            "--target",
            "de",
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert json.loads(captured.out) == {"success": False, "error": "Document not found"}
    assert "Document not found" in captured.err
