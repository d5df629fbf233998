"""Whitespace cleanup for generated declaration text."""

from __future__ import annotations

from typing import List


class DeclarationLinter:
    """Strips trailing spaces and folds runs of blank lines into one."""

    def lint(self, text: str) -> str:
        normalized = text.replace("\r\n", "\n").replace("\r", "\n")
        cleaned: List[str] = []
        previous_blank = True

        for line in normalized.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                if previous_blank:
                    continue
                previous_blank = True
                cleaned.append("")
                continue
            cleaned.append(stripped)
            previous_blank = False

        while cleaned and cleaned[-1] == "":
            cleaned.pop()

        if not cleaned:
            return ""
        return "\n".join(cleaned) + "\n"
