"""
Method Body Blanking

Method and constructor bodies are statements, not type syntax, and the
grammar does not describe them. Before parsing, every body inside a class
is replaced by spaces (newlines kept), so `m() { ... }` reaches the grammar
as `m() {   }` with all later line and column numbers unchanged.

Bodies are found with a brace-balanced scan that skips strings, template
literals and comments. A `{` inside a class body opens a method body when
it follows a closed parameter list and ends a type (not after `:`, `|`,
`=>` and the like, where it opens an object type instead).
"""

import re
from typing import List, Optional

_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

# After one of these a `{` starts a type literal
_TYPE_EXPECTED = frozenset({":", "|", "&", "<", ",", "(", "[", "=", "?", "=>"})

CLASS_BRACE = "class"
OTHER_BRACE = "other"


def skip_trivia(source: str, i: int) -> int:
    """End of the comment or string literal starting at `i`; `i` if there is none"""
    c = source[i]
    if c == "/" and source.startswith("//", i):
        end = source.find("\n", i)
        return len(source) if end < 0 else end
    if c == "/" and source.startswith("/*", i):
        end = source.find("*/", i + 2)
        return len(source) if end < 0 else end + 2
    if c in "'\"`":
        j = i + 1
        while j < len(source):
            ch = source[j]
            if ch == "\\":
                j += 2
                continue
            if ch == c:
                return j + 1
            if ch == "\n" and c != "`":
                return j
            j += 1
        return len(source)
    return i


def matching_brace(source: str, start: int) -> Optional[int]:
    """Index of the `}` closing the `{` at `start`, or None when unbalanced"""
    depth = 0
    i = start
    while i < len(source):
        end = skip_trivia(source, i)
        if end > i:
            i = end
            continue
        c = source[i]
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None


def _next_significant(source: str, i: int) -> str:
    while i < len(source) and source[i].isspace():
        i += 1
    return source[i] if i < len(source) else ""


def blank_method_bodies(source: str) -> str:
    chars = list(source)
    braces: List[str] = []
    pending_class = False
    header_depth = 0        # `<` / `(` open in a class header (extends Base<{...}>)
    parens = 0
    after_params = False
    in_initializer = False
    prev = ""

    i = 0
    while i < len(source):
        end = skip_trivia(source, i)
        if end > i:
            if source[i] in "'\"`":
                prev = source[i]
            i = end
            continue

        c = source[i]
        if c.isspace():
            if c == "\n" and in_initializer and parens == 0:
                in_initializer = False
            i += 1
            continue

        m = _IDENTIFIER.match(source, i)
        if m:
            next_char = _next_significant(source, m.end())
            if m.group(0) == "class" and prev != "." and (next_char == "{" or _IDENTIFIER.match(next_char)):
                pending_class = True
                header_depth = 0
            prev = m.group(0)[-1]
            i = m.end()
            continue

        in_class = bool(braces) and braces[-1] == CLASS_BRACE

        if c == "{":
            if pending_class and header_depth == 0:
                braces.append(CLASS_BRACE)
                pending_class = False
                parens = 0
                after_params = in_initializer = False
            elif in_class and parens == 0 and after_params and not in_initializer \
                    and prev and prev not in _TYPE_EXPECTED:
                close = matching_brace(source, i)
                if close is None:
                    braces.append(OTHER_BRACE)
                else:
                    for j in range(i + 1, close):
                        if chars[j] not in "\r\n":
                            chars[j] = " "
                    after_params = False
                    prev = "}"
                    i = close + 1
                    continue
            else:
                braces.append(OTHER_BRACE)

        elif c == "}":
            if braces:
                braces.pop()

        elif pending_class and c in "<(":
            header_depth += 1
        elif pending_class and c in ">)" and header_depth:
            header_depth -= 1

        elif in_class and c == "(":
            parens += 1
        elif in_class and c == ")" and parens:
            parens -= 1
            if parens == 0 and not in_initializer:
                after_params = True
        elif in_class and c == ";" and parens == 0:
            after_params = in_initializer = False
        elif in_class and c == "=" and parens == 0 and source[i + 1:i + 2] not in ("=", ">") \
                and prev not in ("=", "!", "<", ">"):
            in_initializer = True

        if c == ">" and prev == "=" and source[i - 1] == "=":
            prev = "=>"
        else:
            prev = c
        i += 1

    return "".join(chars)
