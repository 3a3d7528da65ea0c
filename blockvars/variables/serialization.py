"""
Variable field serialization for the document serializer.

A variable is written as ``<field name="VAR" id=".." variabletype="..">name</field>``.
The untyped variable is written with the ``''`` marker so that "explicitly
untyped" stays distinguishable from "attribute absent".
"""

import html
import xml.etree.ElementTree as ET

from blockvars.variables.models import VariableRecord

FIELD_NAME = "VAR"
UNTYPED_MARKER = "''"


def variable_field_xml_string(record: VariableRecord) -> str:
    """
    Generate the XML string for a variable field.

    Names are user input, so both name and type are escaped.

    Args:
        record: Variable to serialize

    Returns:
        The ``<field>`` element as text
    """
    type_string = record.type or UNTYPED_MARKER
    return (
        f'<field name="{FIELD_NAME}" id="{html.escape(record.id)}" '
        f'variabletype="{html.escape(type_string)}">'
        f"{html.escape(record.name)}</field>"
    )


def variable_field_element(record: VariableRecord) -> ET.Element:
    """Generate the ``<field>`` element for a variable as an ElementTree node."""
    return ET.fromstring(variable_field_xml_string(record))


def variable_from_field_element(element: ET.Element) -> VariableRecord:
    """
    Read a variable record back from a ``<field>`` element.

    Raises:
        ValueError: the element is not a variable field or has no id
    """
    if element.tag != "field" or element.get("name") != FIELD_NAME:
        raise ValueError(f"Not a variable field: <{element.tag} name={element.get('name')!r}>")
    variable_id = element.get("id")
    if not variable_id:
        raise ValueError("Variable field has no id")
    type_string = element.get("variabletype", "")
    if type_string == UNTYPED_MARKER:
        type_string = ""
    return VariableRecord(name=element.text or "", type=type_string, id=variable_id)
