from .base import BaseParser
from .template import TemplateParser


def get_parser() -> BaseParser:
    return TemplateParser()
