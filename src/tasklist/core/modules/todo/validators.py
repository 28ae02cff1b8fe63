from typing import Any

from tasklist.errors import ValidationError


def validate_text(text: Any) -> str:
    """Return the trimmed todo text.

    Raises:
        ValidationError: If text is not a string or is blank
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Invalid todo text provided")
    return text.strip()


def validate_update(fields: dict[str, Any]) -> dict[str, Any]:
    """Validate a partial update carrying exactly one of text or completed.

    ``fields`` holds only the keys the client actually sent. Returns the
    normalized values to store.

    Raises:
        ValidationError: If both fields, neither field, or an invalid value is given
    """
    if "text" in fields and "completed" in fields:
        raise ValidationError("Only one field (text or completed) can be updated at a time")

    if "text" in fields and isinstance(fields["text"], str) and fields["text"].strip():
        return {"text": fields["text"].strip()}

    if "completed" in fields and isinstance(fields["completed"], bool):
        return {"completed": fields["completed"]}

    raise ValidationError("Invalid fields to update")
