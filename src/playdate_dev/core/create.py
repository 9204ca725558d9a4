import re
import shutil
from pathlib import Path

from playdate_dev.core.settings import Settings
from playdate_dev.models import CreateResult

DEFAULT_TEMPLATE = "basic"

# Placeholders used by the bundled templates' pdxinfo.
NAME_PLACEHOLDER = "TemplateName"
BUNDLE_PLACEHOLDER = "templatename"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def sanitize_bundle_name(name: str) -> str:
    """Lowercase *name* and drop everything outside ``[a-z0-9]``."""
    return _NON_ALNUM_RE.sub("", name.lower())


def fill_pdxinfo(content: str, name: str) -> str:
    # Display name first, then the bundle identifier fragment.
    content = content.replace(NAME_PLACEHOLDER, name)
    return content.replace(BUNDLE_PLACEHOLDER, sanitize_bundle_name(name))


def create_project(
    settings: Settings,
    name: str,
    template: str | None = None,
    output_dir: str | Path | None = None,
) -> CreateResult:
    """Copy a template into ``<output_dir>/<name>`` and fill in its pdxinfo."""
    template = template or DEFAULT_TEMPLATE
    if not name or not name.strip():
        return CreateResult(success=False, project_path="", template=template, error="Project name is required")

    project_path = Path(output_dir or Path.cwd()).resolve() / name
    template_path = settings.templates_dir / template

    if project_path.exists():
        return CreateResult(
            success=False,
            project_path="",
            template=template,
            error=f"Directory already exists: {project_path}",
        )

    if not template_path.is_dir():
        return CreateResult(success=False, project_path="", template=template, error=f"Template not found: {template}")

    try:
        shutil.copytree(template_path, project_path)
        pdxinfo = project_path / "source" / "pdxinfo"
        if pdxinfo.exists():
            pdxinfo.write_text(fill_pdxinfo(pdxinfo.read_text(encoding="utf-8"), name), encoding="utf-8")
    except OSError as err:
        return CreateResult(success=False, project_path="", template=template, error=str(err))

    return CreateResult(success=True, project_path=str(project_path), template=template)
