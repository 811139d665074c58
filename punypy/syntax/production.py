"""PunyPy abstract syntax tree. Productions form a closed set of variants:

```
Production := Eof | Declaration | FunctionDef | FunctionCall | FunctionBody | Parameters | Expression
Expression := IntLiteral | Variable | Plus
```

Each Production exclusively owns its children: there is no sharing between trees and no cycles. Productions carry little
behaviour besides their textual forms; analysis and evaluation dispatch on the variant (see lang/analyzer.py and
lang/interpreter.py).
"""

from abc import ABC, abstractmethod
from copy import deepcopy
from dataclasses import dataclass, field, fields


class Production(ABC):
    """Superclass of every AST node."""

    @property
    @abstractmethod
    def expr(self):
        """One-line, source-like rendering of this node."""

    @property
    def nodes(self):
        """Child productions, in order."""
        nodes = []
        for attr in fields(self):
            value = getattr(self, attr.name)
            if isinstance(value, Production):
                nodes.append(value)
            elif isinstance(value, list):
                nodes.extend(value)
        return nodes

    @property
    def attributes(self):
        """Non-child fields that make up this node's identity."""
        attributes = {}
        for attr in fields(self):
            value = getattr(self, attr.name)
            if attr.compare and not isinstance(value, (Production, list)):
                attributes[attr.name] = value
        return attributes

    @property
    def position(self):
        """(line, column) where the source of this node starts, None where unknown."""
        return getattr(self, "line", None), getattr(self, "column", None)

    def display(self, indents=0):
        """Displays Production tree with readable format. Walks the tree with an explicit stack, so long '+' chains
        don't hit the recursion limit.

        Format:
        <Production>(<attr>=<value>, nodes=[
            <Production>(<attr>=<value>, nodes=[
                ...
                <Production>(<attr>=<value>)  # <-- if nodes is empty
            ])
        ])
        """
        lines = []
        stack = [(self, indents, "")]  # (node or closing line, indents, trailing text)
        while stack:
            node, depth, end = stack.pop()
            if not isinstance(node, Production):
                lines.append(node)
                continue

            pad = "    " * depth
            attributes = ", ".join(f"{k}={v!r}" for k, v in node.attributes.items())
            nodes = node.nodes
            if not nodes:
                lines.append(f"{pad}{type(node).__name__}({attributes}){end}")
                continue

            lines.append(f"{pad}{type(node).__name__}({attributes}" + (", nodes=[" if attributes else "nodes=["))
            stack.append((f"{pad}]){end}", depth, ""))
            for i in reversed(range(len(nodes))):
                stack.append((nodes[i], depth + 1, "," if i < len(nodes) - 1 else ""))

        return "\n".join(lines)

    def __str__(self):
        return self.display()


class Expression(Production, ABC):
    """Superclass of side-effect-free value productions."""


@dataclass
class IntLiteral(Expression):
    value: int
    line: int = field(default=None, compare=False, repr=False)
    column: int = field(default=None, compare=False, repr=False)

    @property
    def expr(self):
        return str(self.value)


@dataclass
class Variable(Expression):
    name: str
    line: int = field(default=None, compare=False, repr=False)
    column: int = field(default=None, compare=False, repr=False)

    @property
    def expr(self):
        return self.name


@dataclass
class Plus(Expression):
    """left + right. Chains nest to the right: 1 + 2 + 3 is Plus(1, Plus(2, 3))."""
    left: Expression
    right: Expression

    @classmethod
    def chain(cls, operands):
        """Folds operands (at least one) into a right-nested chain. A single operand is returned as is."""
        result = operands[-1]
        for operand in reversed(operands[:-1]):
            result = cls(operand, result)
        return result

    def operands(self):
        """Flattens the right-nested chain starting at self into its operands, in source order."""
        operands = []
        node = self
        while isinstance(node, Plus):
            operands.append(node.left)
            node = node.right
        operands.append(node)
        return operands

    @property
    def position(self):
        return self.left.position

    @property
    def expr(self):
        return " + ".join(operand.expr for operand in self.operands())

    def __deepcopy__(self, memo):
        return Plus.chain([deepcopy(operand, memo) for operand in self.operands()])


@dataclass
class Parameters(Production):
    """Ordered expressions: call arguments, or the parameter names of a function definition."""
    items: list = field(default_factory=list)

    @property
    def expr(self):
        return ", ".join(item.expr for item in self.items)

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


@dataclass
class Declaration(Production):
    name: str
    value: Expression
    line: int = field(default=0, compare=False, repr=False)

    @property
    def expr(self):
        return f"{self.name} = {self.value.expr}"


@dataclass
class FunctionBody(Production):
    indent: str
    statements: list

    @property
    def expr(self):
        return "; ".join(statement.expr for statement in self.statements)


@dataclass
class FunctionDef(Production):
    name: str
    params: Parameters
    body: FunctionBody
    line: int = field(default=0, compare=False, repr=False)
    column: int = field(default=None, compare=False, repr=False)  # of the name

    @property
    def expr(self):
        return f"def {self.name}({self.params.expr}):"


@dataclass
class FunctionCall(Production):
    name: str
    args: Parameters
    line: int = field(default=0, compare=False, repr=False)
    column: int = field(default=None, compare=False, repr=False)

    @property
    def expr(self):
        return f"{self.name}({self.args.expr})"


@dataclass
class Eof(Production):
    """Sentinel ending the top-level statement list. Never a child of another production."""

    @property
    def expr(self):
        return ""
