"""Prompt templates stored as text files next to this module."""
from functools import lru_cache
from pathlib import Path
import typing as t


PROMPTS_DIR = Path(__file__).resolve().parent


@lru_cache(maxsize=None)
def load_prompt(prompt_name: str, prompts_dir: t.Optional[str] = None) -> str:
    """
    Load a prompt template from a text file.

    Args:
        prompt_name: Name of the prompt file (without .txt extension)
        prompts_dir: Optional directory to read from. Defaults to this package.

    Returns:
        The content of the prompt file as a string.

    Raises:
        FileNotFoundError: If the prompt file doesn't exist.
    """
    prompt_file = Path(prompts_dir or PROMPTS_DIR) / f"{prompt_name}.txt"
    if not prompt_file.exists():
        raise FileNotFoundError(f"Prompt file not found: {prompt_file}")
    return prompt_file.read_text(encoding="utf-8")


def render_prompt(prompt_name: str, **values: t.Any) -> str:
    """Fill a prompt template's {placeholders} and strip surrounding whitespace."""
    return load_prompt(prompt_name).format(**values).strip()
