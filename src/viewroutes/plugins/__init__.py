"""Hook plugin package.

Kept free of side effects: concrete plugins register themselves when imported
(``viewroutes.__init__`` imports the built-in ones).
"""

__all__: list[str] = []
