"""
Provides the `Renderer` class and emitter interface for turning Lockset ASTs into text.

Classes and Features:
    - Emitter (Protocol): Interface for all output emitters. Requires `emit_program` and `get_output`.
    - SourceEmitter: Prints canonical Lockset source (round-trips through the parser).
    - JsonEmitter: Prints the tree as a JSON document.
    - Renderer: Selects an emitter by target name ("source", "lockset", "json")
      and dispatches the program root to the matching `emit_*` method.

Example:
    >>> renderer = Renderer("source")
    >>> text = renderer.render(program)

Raises:
    ValueError: If the target is not supported.
    TypeError: If the value to render is not a Program.
    NotImplementedError: If the emitter lacks an `emit_*` method for a node kind.
"""

from typing import Callable, Protocol

from lockset.emitters.json_emitter import JsonEmitter
from lockset.emitters.source_emitter import SourceEmitter, snake_kind
from lockset.lockset_ast import ASTNode, Program


class Emitter(Protocol):  # pragma: no cover
    """Protocol for all Lockset emitters.

    Methods:
        emit_program(node): Consumes the program root.
        get_output(): Returns the complete emitted text as a string.
    """

    def emit_program(self, node: Program) -> None: ...  # pragma: no cover

    def get_output(self) -> str: ...  # pragma: no cover


TARGETS = ("source", "lockset", "json")


class Renderer:
    """Dispatches a Lockset Program to the emitter for the requested target.

    Attributes:
        emitter (Emitter): The selected emitter instance for the output target.
    """

    def __init__(self, target: str, json_indent: int | None = 2) -> None:
        """Initializes the renderer with the desired output target.

        Args:
            target: The output format ("source", "lockset" or "json").
            json_indent: Indentation for the JSON target; ignored otherwise.

        Raises:
            ValueError: If the target is not supported.
        """
        emitters: dict[str, Callable[[], Emitter]] = {
            "source": SourceEmitter,
            "lockset": SourceEmitter,
            "json": lambda: JsonEmitter(indent=json_indent),
        }
        target = target.lower()
        if target not in emitters:
            raise ValueError(f"Unknown render target: {target!r}")
        self.target = target
        self._make_emitter = emitters[target]
        self.emitter: Emitter = self._make_emitter()

    def render(self, program: Program) -> str:
        """Renders a whole program and returns the emitted text.

        Each call starts from a fresh emitter, so one Renderer can be reused.

        Raises:
            TypeError: If `program` is not a Program node.
        """
        if not isinstance(program, Program):
            raise TypeError("Renderer expects a Program node.")
        self.emitter = self._make_emitter()
        self._visit(program)
        return self.emitter.get_output()

    def _visit(self, node: ASTNode) -> None:
        method_name = f"emit_{snake_kind(node.kind)}"
        if hasattr(self.emitter, method_name):
            getattr(self.emitter, method_name)(node)
        else:
            raise NotImplementedError(
                f"No emitter method for node kind '{node.kind}' (target {self.target})"
            )


def format_source(program: Program) -> str:
    """Shortcut for `Renderer("source").render(program)`."""
    return Renderer("source").render(program)
