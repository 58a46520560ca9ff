from typing import Any, Iterable, Sequence


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

PathStep = str | int

TEXT_PATH: tuple[PathStep, ...] = ("candidates", 0, "content", "parts", 0, "text")
INLINE_IMAGE_PATH: tuple[PathStep, ...] = ("candidates", 0, "content", "parts", 0, "inlineData", "data")
IMAGE_URL_PATH: tuple[PathStep, ...] = ("imageUrl",)

NO_TEXT_FALLBACK = "No text returned from Gemini API."


def get_path(data: Any, path: Sequence[PathStep]) -> Any:
    """Walk dict keys and list indices, returning ``MISSING`` on the first absent step."""
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return MISSING
            current = current[step]
        else:
            if not isinstance(current, dict) or step not in current:
                return MISSING
            current = current[step]
    return current


def first_present(data: Any, paths: Iterable[Sequence[PathStep]], default: Any = None) -> Any:
    # empty strings and nulls fall through to the next path
    for path in paths:
        value = get_path(data, path)
        if value is not MISSING and value:
            return value
    return default


def extract_text(data: Any) -> str:
    return first_present(data, [TEXT_PATH], NO_TEXT_FALLBACK)


def extract_image(data: Any) -> Any:
    return first_present(data, [IMAGE_URL_PATH, INLINE_IMAGE_PATH], None)

