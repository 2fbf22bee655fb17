"""
Asset origin data models.
"""
from dataclasses import dataclass


PAGE_PATH_TEMPLATE = "/pages/generic{index}.html"


@dataclass(frozen=True)
class PageFixture:
    """A generated test page. Identical for the same index within one origin lifetime."""
    index: int
    url: str
    title: str
    content: str

    @classmethod
    def generate(cls, base_url: str, index: int) -> "PageFixture":
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Page index must be an int, got {type(index).__name__}")
        if index < 1:
            raise ValueError(f"Page index must be >= 1, got {index}")
        return cls(
            index=index,
            url=base_url.rstrip("/") + PAGE_PATH_TEMPLATE.format(index=index),
            title=f"Test_Page_{index}",
            content=f"Page content: {index}",
        )

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "url": self.url,
            "title": self.title,
            "content": self.content,
        }
