# Core type aliases for Quill's data model.
# Runtime values are plain Python objects rather than a tagged wrapper:
# - Nil      -> the `Nil` sentinel (quill.types.nil)
# - Bool     -> bool
# - Number   -> float
# - String   -> str
# - Function -> quill.types.function.Function
#
# Naming guidance:
# - QuillValue:  use in evaluator/runtime code to denote evaluated values.
# - EvaluatorFn: expression evaluator passed into operator, builtin and statement handlers.
# - ExecutorFn:  statement-sequence executor passed into statement handlers and scope ends.

import logging
from typing import Any, Callable

__version__ = "0.1.0"

# Runtime value alias
QuillValue = Any

# Evaluator function type: (expr, env) -> QuillValue
EvaluatorFn = Callable[..., QuillValue]

# Executor function type: (statements, env) -> ReturnSignal | None
ExecutorFn = Callable[..., Any]

logging.getLogger(__name__).addHandler(logging.NullHandler())
