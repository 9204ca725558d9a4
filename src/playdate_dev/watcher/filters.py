from pathlib import Path

# Files pdc compiles or copies into a bundle.
_PROJECT_SUFFIXES: frozenset[str] = frozenset(
    {
        ".lua",
        ".png",
        ".gif",
        ".jpg",
        ".wav",
        ".aif",
        ".aiff",
        ".mp3",
        ".fnt",
        ".json",
        ".txt",
        ".ttf",
    }
)

_PROJECT_FILENAMES: frozenset[str] = frozenset({"pdxinfo"})


def is_project_file(path: Path) -> bool:
    """True for source/asset files, false for hidden files and anything inside a built bundle."""
    if any(part.endswith(".pdx") for part in path.parts[:-1]):
        return False
    if path.name.startswith("."):
        return False
    return path.name in _PROJECT_FILENAMES or path.suffix.lower() in _PROJECT_SUFFIXES
