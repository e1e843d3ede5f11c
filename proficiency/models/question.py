from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True, slots=True)
class Language:
    id: str
    display_name: str
    icon: str


@dataclass(frozen=True, slots=True)
class Question:
    id: str
    language: str
    order_index: int
    kind: str  # mcq|code_output
    topic: str
    prompt: str
    options: tuple[str, ...]
    correct_answer: str
    difficulty: str = "medium"  # easy|medium|hard
    code_snippet: str | None = None
    explanation: str | None = None

    @staticmethod
    def new(
        *,
        language: str,
        order_index: int,
        kind: str,
        topic: str,
        prompt: str,
        options: tuple[str, ...],
        correct_answer: str,
        difficulty: str = "medium",
        code_snippet: str | None = None,
        explanation: str | None = None,
    ) -> Question:
        return Question(
            id=str(uuid4()),
            language=language,
            order_index=order_index,
            kind=kind,
            topic=topic,
            prompt=prompt,
            options=tuple(options),
            correct_answer=correct_answer,
            difficulty=difficulty,
            code_snippet=code_snippet,
            explanation=explanation,
        )

    def for_display(self) -> DisplayQuestion:
        """Strip the answer key and explanation."""
        return DisplayQuestion(
            id=self.id,
            language=self.language,
            order_index=self.order_index,
            kind=self.kind,
            topic=self.topic,
            difficulty=self.difficulty,
            prompt=self.prompt,
            code_snippet=self.code_snippet,
            options=self.options,
        )


@dataclass(frozen=True, slots=True)
class DisplayQuestion:
    id: str
    language: str
    order_index: int
    kind: str
    topic: str
    difficulty: str
    prompt: str
    code_snippet: str | None
    options: tuple[str, ...]
