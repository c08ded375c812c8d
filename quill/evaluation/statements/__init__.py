"""Registry of statement handlers for the Quill executor.

Maps statement node types to the function executing them. Handlers return
None when execution continues with the next statement, or the ReturnSignal
that must propagate to the nearest function body or `do` block.
"""

from quill.reader.nodes import Defer, ExprStmt, For, If, Let, Return, While
from quill.evaluation.statements.simple_stmts import expression_stmt, let_stmt, return_stmt, defer_stmt
from quill.evaluation.statements.if_stmt import if_stmt
from quill.evaluation.statements.loop_stmts import while_stmt, for_stmt

STATEMENTS = {
    ExprStmt: expression_stmt,
    Let: let_stmt,
    If: if_stmt,
    While: while_stmt,
    For: for_stmt,
    Return: return_stmt,
    Defer: defer_stmt,
}
