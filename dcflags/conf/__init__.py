"""The :mod:`dcflags.conf` submodule contains helpers for attaching option metadata to
dataclass fields via [PEP 593](https://peps.python.org/pep-0593/) runtime annotations.

```python
@dataclasses.dataclass
class Options:
    verbose: Annotated[bool, dcflags.conf.opt(short="v", long="verbose")] = False
```
"""

from ._confstruct import opt
from ._markers import Embed, NoFlag

__all__ = [
    "Embed",
    "NoFlag",
    "opt",
]
