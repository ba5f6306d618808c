# Core type aliases for the Lox data model.
# Runtime values are plain Python objects: int/float for numbers, str for
# strings, bool for booleans, the Nil sentinel for nil, and LoxCallable
# instances for functions. No wrapper Value type is defined.

from typing import Any

# Runtime value alias
LoxValue = Any
