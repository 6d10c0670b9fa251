# reflector/codec/tokens.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Token streams over JSON-like trees.

The codec never sees text. It drives a StructuredReader/StructuredWriter pair;
the JSON classes here adapt the stdlib ``json`` module to that token model.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Iterator, List, Optional

from reflector.core.errors import FormatError
from reflector.interfaces.types import SCALAR_TOKENS, Token, TokenType


def iter_tokens(tree: Any) -> Iterator[Token]:
    """
    Flatten a tree of dicts, lists and scalars into tokens, depth first.

    :raises TypeError: For values with no token representation.
    """
    if isinstance(tree, dict):
        yield TokenType.START_OBJECT, None
        for name, value in tree.items():
            yield TokenType.PROPERTY_NAME, str(name)
            yield from iter_tokens(value)
        yield TokenType.END_OBJECT, None
    elif isinstance(tree, (list, tuple)):
        yield TokenType.START_ARRAY, None
        for item in tree:
            yield from iter_tokens(item)
        yield TokenType.END_ARRAY, None
    elif tree is None:
        yield TokenType.NULL, None
    elif tree is True:
        yield TokenType.TRUE, True
    elif tree is False:
        yield TokenType.FALSE, False
    elif isinstance(tree, (int, float)):
        yield TokenType.NUMBER, tree
    elif isinstance(tree, str):
        yield TokenType.STRING, tree
    else:
        raise TypeError(f"Cannot tokenize value of type {type(tree).__name__}")


class TokenStreamReader:
    """
    Forward-only reader over a token iterable.

    ``token_type`` is NONE until the first ``read()`` and again once the stream
    is exhausted.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = iter(tokens)
        self._current: Token = (TokenType.NONE, None)

    @classmethod
    def from_tree(cls, tree: Any) -> "TokenStreamReader":
        return cls(iter_tokens(tree))

    @property
    def token_type(self) -> TokenType:
        return self._current[0]

    def read(self) -> bool:
        """Advance to the next token. Returns False at end of input."""
        try:
            self._current = next(self._tokens)
        except StopIteration:
            self._current = (TokenType.NONE, None)
            return False
        return True

    def get_value(self) -> Any:
        """Payload of the current token: the name, string, number or boolean."""
        return self._current[1]

    def skip(self) -> None:
        """
        Skip the current value. On a start token, advance to its matching end
        token; on anything else, do nothing.

        :raises FormatError: If the input ends inside the value.
        """
        if self.token_type not in (TokenType.START_OBJECT, TokenType.START_ARRAY):
            return
        depth = 1
        while depth:
            if not self.read():
                raise FormatError("Unexpected end of input while skipping a value")
            if self.token_type in (TokenType.START_OBJECT, TokenType.START_ARRAY):
                depth += 1
            elif self.token_type in (TokenType.END_OBJECT, TokenType.END_ARRAY):
                depth -= 1


class JsonTokenReader(TokenStreamReader):
    """
    Token reader over JSON text.

    :raises FormatError: If the text is not valid JSON.
    """

    def __init__(self, text: str) -> None:
        try:
            tree = json.loads(text)
        except json.JSONDecodeError as e:
            raise FormatError(f"Invalid JSON: {e}") from e
        super().__init__(iter_tokens(tree))


def read_tree(reader: TokenStreamReader) -> Any:
    """
    Materialize the value at the reader's current token into dicts, lists and
    scalars, leaving the reader on the value's last token.

    :raises FormatError: On a misplaced token or premature end of input.
    """
    token = reader.token_type
    if token is TokenType.START_OBJECT:
        obj = {}
        while reader.read():
            if reader.token_type is TokenType.END_OBJECT:
                return obj
            if reader.token_type is not TokenType.PROPERTY_NAME:
                raise FormatError(f"Expected a property name, got {reader.token_type.name}")
            name = reader.get_value()
            if not reader.read():
                break
            obj[name] = read_tree(reader)
        raise FormatError("Unexpected end of input inside an object")
    if token is TokenType.START_ARRAY:
        items = []
        while reader.read():
            if reader.token_type is TokenType.END_ARRAY:
                return items
            items.append(read_tree(reader))
        raise FormatError("Unexpected end of input inside an array")
    if token in SCALAR_TOKENS:
        return reader.get_value()
    raise FormatError(f"Expected a value, got {token.name}")


class _Frame:
    __slots__ = ("is_object", "count", "pending_name")

    def __init__(self, is_object: bool) -> None:
        self.is_object = is_object
        self.count = 0
        self.pending_name = False


class JsonTokenWriter:
    """
    Token writer producing compact JSON text.

    Structure is checked as tokens arrive: names only inside objects, every
    object value preceded by a name, balanced start/end tokens and a single
    root value.
    """

    def __init__(self) -> None:
        self._parts: List[str] = []
        self._stack: List[_Frame] = []
        self._root_written = False

    def _top(self) -> Optional[_Frame]:
        return self._stack[-1] if self._stack else None

    def _begin_value(self) -> None:
        frame = self._top()
        if frame is None:
            if self._root_written:
                raise FormatError("Document already has a root value")
        elif frame.is_object:
            if not frame.pending_name:
                raise FormatError("Object values must follow a property name")
            frame.pending_name = False
        else:
            if frame.count:
                self._parts.append(",")
            frame.count += 1

    def _end_value(self) -> None:
        if not self._stack:
            self._root_written = True

    def _close(self, is_object: bool, char: str) -> None:
        frame = self._top()
        if frame is None or frame.is_object is not is_object:
            raise FormatError(f"Unbalanced '{char}'")
        if frame.pending_name:
            raise FormatError("Property name without a value")
        self._stack.pop()
        self._parts.append(char)
        self._end_value()

    def write_start_object(self) -> None:
        self._begin_value()
        self._parts.append("{")
        self._stack.append(_Frame(is_object=True))

    def write_end_object(self) -> None:
        self._close(True, "}")

    def write_start_array(self) -> None:
        self._begin_value()
        self._parts.append("[")
        self._stack.append(_Frame(is_object=False))

    def write_end_array(self) -> None:
        self._close(False, "]")

    def write_property_name(self, name: str) -> None:
        frame = self._top()
        if frame is None or not frame.is_object:
            raise FormatError(f"Property name '{name}' outside of an object")
        if frame.pending_name:
            raise FormatError(f"Property name '{name}' follows another name")
        if frame.count:
            self._parts.append(",")
        frame.count += 1
        frame.pending_name = True
        self._parts.append(json.dumps(name))
        self._parts.append(":")

    def write_value(self, value: Any) -> None:
        """
        Write a scalar: str, int, float, bool or None.

        :raises TypeError: For any other value.
        :raises FormatError: For NaN and infinities, which JSON cannot carry.
        """
        if value is None:
            self.write_null()
            return
        if not isinstance(value, (str, int, float)):
            raise TypeError(f"Not a scalar: {type(value).__name__}")
        try:
            text = json.dumps(value, allow_nan=False)
        except ValueError as e:
            raise FormatError(f"Cannot write {value!r}: {e}") from e
        self._begin_value()
        self._parts.append(text)
        self._end_value()

    def write_null(self) -> None:
        self._begin_value()
        self._parts.append("null")
        self._end_value()

    def getvalue(self) -> str:
        """
        The finished document.

        :raises FormatError: If no root value was written or a container is open.
        """
        if self._stack or not self._root_written:
            raise FormatError("Incomplete document")
        return "".join(self._parts)
