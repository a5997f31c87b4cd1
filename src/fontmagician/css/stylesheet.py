"""Minimal stylesheet tree built on tinycss2.

The font pass only needs a handful of primitives: iterate at-rules and
declarations, read raw values, insert generated at-rules and remove existing
ones. Untouched nodes are serialised back exactly as tinycss2 parsed them.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
import re

import tinycss2
from tinycss2.ast import AtRule, Declaration, Node, WhitespaceToken

from fontmagician.core.exceptions import StylesheetError


# Statements that CSS requires to stay ahead of every other rule.
_LEADING_STATEMENTS = frozenset({"charset", "import"})
_TRANSPARENT = frozenset({"whitespace", "comment"})


def _children(node: Node) -> list[Node]:
    content = getattr(node, "content", None)
    if not content or node.type not in {"qualified-rule", "at-rule"}:
        return []
    return tinycss2.parse_blocks_contents(content)


def _walk(nodes: Iterable[Node]) -> Iterator[Node]:
    for node in nodes:
        yield node
        if node.type in {"qualified-rule", "at-rule"}:
            yield from _walk(_children(node))


def _strip_at_rules(tokens: list[Node], lowered: str, removed: list[AtRule]) -> list[Node]:
    # Works on raw block tokens so the remaining content serialises unchanged.
    kept: list[Node] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token.type == "at-keyword" and token.lower_value == lowered:
            end = index
            while end < len(tokens) and not _ends_at_rule(tokens[end]):
                end += 1
            removed.append(tinycss2.parse_one_rule(tokens[index : end + 1]))
            index = end + 1
            continue
        if token.type == "{} block":
            token.content = _strip_at_rules(token.content, lowered, removed)
        kept.append(token)
        index += 1
    return kept


def _ends_at_rule(token: Node) -> bool:
    return token.type == "{} block" or (token.type == "literal" and token.value == ";")


class GeneratedAtRule(AtRule):
    """At-rule built by the pass; serialises back to the exact text it was parsed from."""

    __slots__ = ["text"]

    def __init__(self, text: str) -> None:
        parsed = tinycss2.parse_one_rule(text)
        if parsed.type != "at-rule":
            raise StylesheetError(f"Generated rule is invalid: {text}")
        super().__init__(
            parsed.source_line,
            parsed.source_column,
            parsed.at_keyword,
            parsed.lower_at_keyword,
            parsed.prelude,
            parsed.content,
        )
        self.text = text

    def _serialize_to(self, write) -> None:
        write(self.text)


def declaration_value(declaration: Declaration) -> str:
    """Return the raw declaration value without surrounding whitespace."""
    return tinycss2.serialize(declaration.value).strip()


class Stylesheet:
    """Mutable list of top-level tinycss2 nodes."""

    def __init__(self, nodes: Sequence[Node]) -> None:
        self.nodes: list[Node] = list(nodes)
        # Line breaks added after generated rules, dropped with their rule.
        self._separators: set[int] = set()

    @classmethod
    def parse(cls, text: str) -> Stylesheet:
        nodes = tinycss2.parse_stylesheet(text)
        for node in nodes:
            if node.type == "error":
                raise StylesheetError(
                    f"CSS syntax error at {node.source_line}:{node.source_column}: {node.message}"
                )
        return cls(nodes)

    def serialize(self) -> str:
        return tinycss2.serialize(self.nodes)

    def __str__(self) -> str:
        return self.serialize()

    def at_rules(self, name: str, *, recursive: bool = True) -> Iterator[AtRule]:
        """Yield at-rules named ``name`` in document order."""
        lowered = name.lower()
        nodes = _walk(self.nodes) if recursive else iter(self.nodes)
        for node in nodes:
            if node.type == "at-rule" and node.lower_at_keyword == lowered:
                yield node

    def declarations(self, pattern: str | re.Pattern[str]) -> Iterator[Declaration]:
        """Yield declarations whose property matches ``pattern`` (full match)."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        for node in _walk(self.nodes):
            if node.type == "declaration" and regex.fullmatch(node.lower_name):
                yield node

    @staticmethod
    def rule_declarations(rule: Node, name: str | None = None) -> Iterator[Declaration]:
        """Yield the direct declarations of ``rule``, optionally filtered by name."""
        lowered = name.lower() if name else None
        for node in _children(rule):
            if node.type != "declaration":
                continue
            if lowered is None or node.lower_name == lowered:
                yield node

    def _insertion_index(self) -> int:
        index = 0
        for position, node in enumerate(self.nodes):
            if node.type in _TRANSPARENT:
                continue
            if node.type == "at-rule" and node.lower_at_keyword in _LEADING_STATEMENTS:
                index = position + 1
                continue
            break
        return index

    def prepend(self, name: str, blocks: Iterable[Sequence[tuple[str, str]]]) -> list[AtRule]:
        """Insert one ``@name{...}`` rule per declaration block before the content.

        Rules keep the order of ``blocks`` and land after any leading
        ``@charset``/``@import`` statements.
        """
        created: list[AtRule] = []
        inserted: list[Node] = []
        for declarations in blocks:
            body = ";".join(f"{prop}:{value}" for prop, value in declarations)
            rule = GeneratedAtRule(f"@{name}{{{body}}}")
            created.append(rule)
            separator = WhitespaceToken(rule.source_line, rule.source_column, "\n")
            self._separators.add(id(separator))
            inserted.extend((rule, separator))
        index = self._insertion_index()
        self.nodes[index:index] = inserted
        return created

    def pop_at_rules(self, name: str) -> list[AtRule]:
        """Remove every at-rule named ``name``, nested ones included.

        Returns the removed rules in document order. Blocks that contained
        nested matches keep the rest of their tokens untouched.
        """
        lowered = name.lower()
        removed: list[AtRule] = []
        for node in list(self.nodes):
            if node.type == "at-rule" and node.lower_at_keyword == lowered:
                removed.append(node)
                self.remove(node)
            elif node.type in {"qualified-rule", "at-rule"} and node.content:
                node.content = _strip_at_rules(node.content, lowered, removed)
        return removed

    def remove(self, rule: Node) -> bool:
        """Remove a top-level rule; return whether it was found."""
        for position, node in enumerate(self.nodes):
            if node is rule:
                end = position + 1
                if end < len(self.nodes) and id(self.nodes[end]) in self._separators:
                    self._separators.discard(id(self.nodes[end]))
                    end += 1
                del self.nodes[position:end]
                return True
        return False


__all__ = ["GeneratedAtRule", "Stylesheet", "declaration_value"]
