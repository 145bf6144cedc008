"""
Editing session for the metadata of one file.
"""

from typing import List, Optional

from .models import Metadata
from .scorer import calculate_score


class MetadataEditor:
    """Holds edited values separately from the saved metadata."""

    def __init__(self):
        self.title = ""
        self.description = ""
        self.keywords: List[str] = []
        self.has_changes = False

    def load_from_metadata(self, metadata: Optional[Metadata]) -> None:
        """Replace the edited values, clearing the change flag."""
        if metadata is None:
            metadata = Metadata()
        self.title = metadata.title
        self.description = metadata.description
        self.keywords = list(metadata.keywords)
        self.has_changes = False

    def set_title(self, title: str) -> None:
        self.title = title
        self.has_changes = True

    def set_description(self, description: str) -> None:
        self.description = description
        self.has_changes = True

    def set_keywords(self, keywords: List[str]) -> None:
        self.keywords = list(keywords)
        self.has_changes = True

    def add_keyword(self, keyword: str) -> bool:
        """
        Append a keyword, lowercased and trimmed.

        Returns:
            False if the keyword was empty or already present
        """
        keyword = keyword.lower().strip()
        if not keyword or keyword in self.keywords:
            return False
        self.keywords.append(keyword)
        self.has_changes = True
        return True

    def remove_keyword(self, index: int) -> None:
        if 0 <= index < len(self.keywords):
            del self.keywords[index]
            self.has_changes = True

    def reorder_keywords(self, from_index: int, to_index: int) -> None:
        """Move the keyword at ``from_index`` to ``to_index``."""
        if not 0 <= from_index < len(self.keywords):
            return
        keyword = self.keywords.pop(from_index)
        self.keywords.insert(to_index, keyword)
        self.has_changes = True

    def get_metadata(self) -> Metadata:
        return Metadata(
            title=self.title,
            description=self.description,
            keywords=list(self.keywords),
        )

    def score(self) -> int:
        """Score of the current edits."""
        return calculate_score(self.get_metadata())

    def copy_text(self) -> str:
        """All fields as plain text for the clipboard."""
        return "\n\n".join([
            f"Title: {self.title}",
            f"Description: {self.description}",
            f"Keywords: {', '.join(self.keywords)}",
        ])

    def reset(self) -> None:
        self.load_from_metadata(None)
