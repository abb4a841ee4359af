"""Block parsing mixins for the Trellis parser."""

from trellis.parser.blocks.control_flow import ControlFlowBlockParsingMixin
from trellis.parser.blocks.core import BlockTagMixin, OpenedTag
from trellis.parser.blocks.functions import FunctionBlockParsingMixin
from trellis.parser.blocks.special_blocks import SpecialBlockParsingMixin
from trellis.parser.blocks.template_structure import TemplateStructureBlockParsingMixin
from trellis.parser.blocks.variables import VariableBlockParsingMixin

__all__ = [
    "BlockTagMixin",
    "ControlFlowBlockParsingMixin",
    "FunctionBlockParsingMixin",
    "OpenedTag",
    "SpecialBlockParsingMixin",
    "TemplateStructureBlockParsingMixin",
    "VariableBlockParsingMixin",
]
