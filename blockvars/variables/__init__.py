"""
Variable records, namespaces and identity resolution.

## Main Components

- **VariableRecord**: (id, name, type) triple for one variable
- **VariableNamespace**: records indexed by id and by (name, type)
- **VariableRegistry**: real + potential namespaces with lookup/create/rename
- **generate_unique_name**: next free name in the i, j, k, m, ... cycle
- **NamePromptSession**: create/rename prompt state machine

## Example Usage

```python
from blockvars.variables import VariableRegistry

registry = VariableRegistry()
counter = registry.get_or_create(name="counter", type="Number")
unnamed = registry.get_or_create(type="")  # gets the name "i"

registry.attach_potential()
preview = registry.get_or_create(type="")  # created in the preview namespace
```
"""

from .models import (
    VariableRecord,
    VariableReference,
    create_variable_id,
)

from .namespace import VariableNamespace

from .naming import (
    DEFAULT_LETTERS,
    candidate_names,
    generate_unique_name,
)

from .registry import VariableRegistry

from .prompts import (
    NamePromptSession,
    PromptOutcome,
    PromptState,
    create_variable_interactively,
    create_variable_session,
    normalize_name,
    rename_variable_interactively,
    rename_variable_session,
)

from .serialization import (
    UNTYPED_MARKER,
    variable_field_element,
    variable_field_xml_string,
    variable_from_field_element,
)

__all__ = [
    # Models
    "VariableRecord",
    "VariableReference",
    "create_variable_id",
    # Namespaces
    "VariableNamespace",
    "VariableRegistry",
    # Naming
    "DEFAULT_LETTERS",
    "candidate_names",
    "generate_unique_name",
    # Prompts
    "NamePromptSession",
    "PromptOutcome",
    "PromptState",
    "create_variable_interactively",
    "create_variable_session",
    "normalize_name",
    "rename_variable_interactively",
    "rename_variable_session",
    # Serialization
    "UNTYPED_MARKER",
    "variable_field_element",
    "variable_field_xml_string",
    "variable_from_field_element",
]
