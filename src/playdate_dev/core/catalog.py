import re
from pathlib import Path

from playdate_dev.core.build import DEFAULT_OUTPUT_NAME
from playdate_dev.core.settings import Settings
from playdate_dev.models import ExampleInfo, TemplateInfo

# First line inside a leading "--[[" block comment.
_DESCRIPTION_RE = re.compile(r"^--\[\[\s*\n\s*(.+?)\n")


def _subdirectories(root: Path) -> list[Path]:
    if not root.is_dir():
        return []
    return sorted((p for p in root.iterdir() if p.is_dir()), key=lambda p: p.name)


def read_template_description(template_path: Path) -> str:
    main_lua = template_path / "source" / "main.lua"
    try:
        content = main_lua.read_text(encoding="utf-8")
    except OSError:
        return ""
    match = _DESCRIPTION_RE.match(content)
    return match.group(1).strip() if match else ""


def list_templates(settings: Settings) -> list[TemplateInfo]:
    return [
        TemplateInfo(name=path.name, description=read_template_description(path), path=str(path))
        for path in _subdirectories(settings.templates_dir)
    ]


def list_examples(settings: Settings) -> list[ExampleInfo]:
    return [
        ExampleInfo(name=path.name, path=str(path), has_built_pdx=(path / DEFAULT_OUTPUT_NAME).exists())
        for path in _subdirectories(settings.examples_dir)
    ]


def find_example(settings: Settings, name: str) -> Path | None:
    path = settings.examples_dir / name
    return path if path.is_dir() else None
