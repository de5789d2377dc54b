"""
Pattern loader utility for StitchMap.

Loads YAML pattern files from the patterns/ directory.
"""

from pathlib import Path
import yaml

from stitchmap.schemas import Pattern


# Default patterns directory (relative to project root)
PATTERNS_DIR = Path(__file__).parent.parent.parent / "patterns"


def load_pattern(name: str | Path, patterns_dir: Path | None = None) -> Pattern:
    """
    Load a pattern by name or path.

    Args:
        name: Pattern name without .yaml extension (e.g., "magic_ball"),
            or a path to a .yaml file
        patterns_dir: Optional custom patterns directory

    Returns:
        Validated Pattern

    Raises:
        FileNotFoundError: If pattern file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If the file doesn't describe a valid pattern
    """
    file_path = Path(name)
    if file_path.suffix not in (".yaml", ".yml"):
        dir_path = patterns_dir or PATTERNS_DIR
        file_path = dir_path / f"{name}.yaml"

    if not file_path.exists():
        raise FileNotFoundError(f"Pattern file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return Pattern.model_validate(data)


def get_available_patterns(patterns_dir: Path | None = None) -> list[str]:
    """
    List all available pattern files.

    Args:
        patterns_dir: Optional custom patterns directory

    Returns:
        Sorted list of pattern names (without .yaml extension)
    """
    dir_path = patterns_dir or PATTERNS_DIR
    if not dir_path.exists():
        return []
    return sorted(p.stem for p in dir_path.glob("*.yaml"))


def find_pattern(pattern_name: str, patterns_dir: Path | None = None) -> Pattern:
    """
    Find a pattern by its display name (Pattern.name, not the file name).

    Work sessions record the display name, so this is how a session's
    pattern is reloaded.

    Raises:
        FileNotFoundError: If no pattern file has that name
    """
    for name in get_available_patterns(patterns_dir):
        pattern = load_pattern(name, patterns_dir)
        if pattern.name == pattern_name:
            return pattern
    raise FileNotFoundError(f"No pattern named '{pattern_name}'")
