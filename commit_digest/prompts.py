"""Single-slot prompt templates."""

from typing import Final


SLOT: Final[str] = "%s"


class PromptTemplate:
    """A prompt with exactly one ``%s`` slot for the payload text.

    Rendering is a plain substitution of that one slot, so stray ``%`` or
    ``{}`` sequences in either the template or the payload come through
    untouched.
    """

    def __init__(self, template: str) -> None:
        self.template = self.validate(template)
        self._head, self._tail = template.split(SLOT, 1)

    @staticmethod
    def validate(template: str) -> str:
        """Return *template* if it holds exactly one slot, else raise ValueError."""

        slots = template.count(SLOT)
        if slots != 1:
            raise ValueError(
                f"Prompt template must contain exactly one {SLOT!r} slot, found {slots}"
            )
        return template

    def render(self, payload: str) -> str:
        return f"{self._head}{payload}{self._tail}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.template!r})"
