import re
from pathlib import Path

from policy_compass.errors import FailedPreconditionError, InvalidArgumentError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"
_VARIANT_RE = re.compile(r"^[a-z][a-z0-9_]*$")


def available_variants(prompt_dir: Path | None = None) -> list[str]:
    """List the rubric variants shipped as ``<variant>_prompt.txt`` files."""
    directory = prompt_dir or _DEFAULT_PROMPT_DIR
    return sorted(p.name.removesuffix("_prompt.txt") for p in directory.glob("*_prompt.txt"))


def load_prompt_template(variant: str, prompt_dir: Path | None = None) -> str:
    """Load the prompt template for a rubric variant.

    Args:
        variant: Rubric name, e.g. "strict" or "baseline".
        prompt_dir: Directory holding the templates.
              Defaults to the bundled prompts directory.

    Returns:
        The raw template string with {document_text} and {json_schema}
        placeholders.

    Raises:
        InvalidArgumentError: if the variant is not known.
        FailedPreconditionError: if the template file cannot be read.
    """
    directory = prompt_dir or _DEFAULT_PROMPT_DIR
    if not _VARIANT_RE.match(variant):
        raise InvalidArgumentError(f"Unknown analysis variant '{variant}'")
    path = directory / f"{variant}_prompt.txt"
    if not path.exists():
        raise InvalidArgumentError(
            f"Unknown analysis variant '{variant}'. "
            f"Choose from: {available_variants(directory)}"
        )
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FailedPreconditionError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the response JSON schema.

    Raises:
        FailedPreconditionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "analysis_schema.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FailedPreconditionError(f"Failed to load JSON schema: {exc}") from exc
