"""Request handlers.

Handlers take a ``Store`` plus path parameters and submitted form data and
return what the HTTP layer should do: a ``Render`` of a template or a
``Redirect``. Missing records raise ``catalog.errors.NotFound``; store
failures propagate untouched.
"""

from dataclasses import dataclass
from typing import Any, Dict


class Render:
    def __init__(self, template: str, **context: Any):
        self.template = template
        self.context: Dict[str, Any] = context

    def __repr__(self):
        return f"Render({self.template!r}, {sorted(self.context)!r})"


@dataclass(frozen=True)
class Redirect:
    location: str
