"""Expression tree for the calculator language. Trees are built once by the parser and never mutated afterwards;
evaluate is a read-only traversal.

The set of node types is closed:

```
<expr> ::= IntegerLiteral(value)
         | BinaryOp(operator, left, right)     ; operator is one of add, sub, mult, div
         | Let(name, bound, body)              ; body already holds VariableRefs pointing at bound
         | VariableRef(name, resolved)         ; resolved is shared with the Let that introduced name
```

The reference graph is a DAG rooted at each Let: a VariableRef only ever points at an operand parsed before it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from calculator.lang.error import CalculatorError
from calculator.lang.numerical import Operator


class Expression(ABC):
    """Superclass representing anything that evaluates to a 32-bit signed integer."""

    @abstractmethod
    def evaluate(self):
        """Returns the int value of this node. Raises a CalculatorError of kind ARITHMETIC on overflow or division
        by zero.
        """

    @property
    def nodes(self):
        """Child nodes, in evaluation order."""
        return []

    @property
    def label(self):
        return type(self).__name__

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Expression>(<label>, nodes=[
            <Expression>(<label>)  # <-- if nodes is empty
        ])
        """
        result = f"{'    ' * indents}{self.label}"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int
    start: int = field(default=0, compare=False, repr=False)
    end: int = field(default=0, compare=False, repr=False)

    def evaluate(self):
        return self.value

    @property
    def label(self):
        return f"IntegerLiteral({self.value})"

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class BinaryOp(Expression):
    operator: Operator
    left: Expression
    right: Expression
    source: str = field(default="", compare=False, repr=False)  # for diagnostics only
    start: int = field(default=0, compare=False, repr=False)
    end: int = field(default=0, compare=False, repr=False)

    def evaluate(self):
        left = self.left.evaluate()
        right = self.right.evaluate()
        try:
            return self.operator.apply(left, right)
        except CalculatorError as error:
            if not error.expr:
                error.expr, error.start, error.end = self.source, self.start, self.end
            raise

    @property
    def nodes(self):
        return [self.left, self.right]

    @property
    def label(self):
        return f"BinaryOp({self.operator.keyword})"

    def __str__(self):
        return f"{self.operator.keyword}({self.left}, {self.right})"


@dataclass(frozen=True)
class Let(Expression):
    name: str
    bound: Expression
    body: Expression
    start: int = field(default=0, compare=False, repr=False)
    end: int = field(default=0, compare=False, repr=False)

    def evaluate(self):
        # bound is not memoized: every VariableRef in body evaluates it again
        self.bound.evaluate()
        return self.body.evaluate()

    @property
    def nodes(self):
        return [self.bound, self.body]

    @property
    def label(self):
        return f"Let({self.name})"

    def __str__(self):
        return f"let({self.name}, {self.bound}, {self.body})"


@dataclass(frozen=True)
class VariableRef(Expression):
    name: str
    resolved: Expression = field(repr=False)
    start: int = field(default=0, compare=False, repr=False)
    end: int = field(default=0, compare=False, repr=False)

    def evaluate(self):
        return self.resolved.evaluate()

    @property
    def label(self):
        return f"VariableRef({self.name})"

    def __str__(self):
        return self.name
