"""
Serializes a Lockset AST to JSON.

The output is `json.dumps(program.to_dict())`: every node becomes an object
with a `kind` key plus its fields, child sequences become arrays, and unset
optional fields become `null`.
"""

import json

from lockset.lockset_ast import Program


class JsonEmitter:
    """Emits a JSON document for a whole program.

    Attributes:
        indent (int | None): Indentation passed to `json.dumps`; None for a single line.
        output (str): The emitted document, empty until `emit_program` runs.
    """

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent
        self.output = ""

    def emit_program(self, node: Program) -> None:
        self.output = json.dumps(node.to_dict(), indent=self.indent)

    def get_output(self) -> str:
        return self.output
