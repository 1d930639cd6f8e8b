"""
Route Pattern Compiler
Compiles ':name:' placeholder patterns into anchored regular expressions
"""
import re
import threading
from typing import Dict, List, Optional, Tuple
from pyweave.exceptions import InvalidHandlerError

# ':user_id:' style placeholder
PLACEHOLDER = re.compile(r':([A-Za-z_][A-Za-z0-9_]*):')

# A placeholder matches one path segment of at least one character
SEGMENT = r'([^/]+)'


class CompiledPattern:
    """
    Compiled form of a route pattern

    Capture groups are in the left-to-right order of the placeholders, so
    `match()` returns values ready to be passed positionally to an action.

    Example:
        compiled = CompiledPattern('/user/:user_id:/post/:post_id:')
        compiled.match('/user/42/post/7')  # ['42', '7']
        compiled.parameter_names            # ['user_id', 'post_id']
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.parameter_names: List[str] = []
        self.regex = self._compile(pattern)

    def _compile(self, pattern: str):
        parts = []
        position = 0

        for placeholder in PLACEHOLDER.finditer(pattern):
            # Literal text between placeholders is matched exactly
            parts.append(re.escape(pattern[position:placeholder.start()]))
            parts.append(SEGMENT)
            self.parameter_names.append(placeholder.group(1))
            position = placeholder.end()

        parts.append(re.escape(pattern[position:]))
        return re.compile('^' + ''.join(parts) + '$')

    def match(self, path: str) -> Optional[List[str]]:
        """
        Match a normalized path

        Returns:
            Ordered list of captured values, or None when the path does not match
        """
        matched = self.regex.match(path)
        if matched is None:
            return None
        return list(matched.groups())

    def match_named(self, path: str) -> Optional[Dict[str, str]]:
        values = self.match(path)
        if values is None:
            return None
        return dict(zip(self.parameter_names, values))

    @property
    def is_static(self) -> bool:
        return not self.parameter_names

    def __repr__(self):
        return f"<CompiledPattern {self.pattern!r} params={self.parameter_names}>"


_cache: Dict[str, CompiledPattern] = {}
_cache_lock = threading.Lock()


def compile_pattern(pattern: str) -> CompiledPattern:
    """
    Compile a pattern, reusing the cached result for the same pattern string
    """
    compiled = _cache.get(pattern)
    if compiled is not None:
        return compiled

    with _cache_lock:
        compiled = _cache.get(pattern)
        if compiled is None:
            compiled = CompiledPattern(pattern)
            _cache[pattern] = compiled
        return compiled


def normalize_path(path: str) -> str:
    """
    Normalize a route pattern or request path

    Ensures a leading '/' and strips the trailing '/' except for the root.
    """
    if not path:
        return '/'

    if not path.startswith('/'):
        path = '/' + path

    if len(path) > 1:
        path = path.rstrip('/') or '/'

    return path


def join_paths(prefix: str, path: str) -> str:
    """Join a group prefix and a route pattern"""
    prefix = prefix.strip('/')
    path = path.strip('/')
    joined = '/'.join(part for part in (prefix, path) if part)
    return normalize_path(joined)


def parse_handler(handler: str) -> Tuple[str, str]:
    """
    Split 'Controller@action' into its two parts

    Raises:
        InvalidHandlerError: Unless the handler has exactly one '@' with
            non-empty text on both sides
    """
    if not isinstance(handler, str) or handler.count('@') != 1:
        raise InvalidHandlerError(str(handler))

    controller, action = (part.strip() for part in handler.split('@'))
    if not controller or not action:
        raise InvalidHandlerError(handler)

    return controller, action
