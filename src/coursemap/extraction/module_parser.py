"""
Module Parser - Turn one module descriptor into a Module.
=========================================================

A module descriptor is an XML-like entry such as ``course/module_3.xml``.
Its title comes from the first ``<title>`` element; its element counts come
from tag patterns (see ``counter``), and the counts drive the compliance
score.
"""

import random
from typing import Optional

from coursemap.extraction.counter import count_module_elements
from coursemap.extraction.manifest import extract_title
from coursemap.extraction.scoring import score_compliance
from coursemap.shared.schemas import Module


def module_id(number: int) -> str:
    return f"module-{number}"


def module_name(title: str, number: int) -> str:
    """Prefix ``'Module <n>: '`` unless the title already starts with 'Module'."""
    if title.startswith("Module"):
        return title
    return f"Module {number}: {title}"


def parse_module_xml(
    xml_content: str,
    module_number: int,
    rng: Optional[random.Random] = None,
) -> Module:
    """
    Parse a module descriptor's text.

    Args:
        xml_content: Text of the descriptor entry
        module_number: 1-based position of the module in the course
        rng: Random source for the compliance score

    Returns:
        Fully populated Module

    Example:
        >>> module = parse_module_xml("<title>Cells</title><quiz/>", 2)
        >>> module.name
        'Module 2: Cells'
    """
    title = extract_title(xml_content) or f"Module {module_number}"
    counts = count_module_elements(xml_content)

    return Module(
        id=module_id(module_number),
        name=module_name(title, module_number),
        qm_compliance=score_compliance(*counts, rng=rng),
        objectives=counts.objectives,
        activities=counts.activities,
        assessments=counts.assessments,
    )
