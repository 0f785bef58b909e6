"""Template sources backed by Jinja2.

A template source compiles a list of files into one `JinjaTemplate`. Every
file in the list becomes part of the same compiled unit, named by its base
name, so files can ``{% include %}``, ``{% import %}``, or ``{% extends %}``
one another, and any file or ``{% block %}`` in the unit can be rendered by
name.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import DictLoader, Environment, TemplateError
from pydantic import BaseModel

from .exceptions import TemplateCompileError, TemplateNotFoundError
from .types import TemplateFunctions, TextSink

__all__ = [
    "JinjaTemplate",
    "html_source",
    "text_source",
]


class JinjaTemplate:
    """A compiled unit of one or more Jinja2 template files.

    All files are read and compiled on construction. Rendering only uses the
    in-memory compiled templates and never touches the filesystem.

    Parameters
    ----------
    root
        Base name of the file rendered by `render`.
    sources
        Mapping of base name to template source text.
    functions
        Callables made available to templates as both globals and filters.
    autoescape
        Whether to escape output for HTML.

    Raises
    ------
    jinja2.TemplateError
        Raised if any of the sources cannot be compiled.
    """

    def __init__(
        self,
        root: str,
        sources: Mapping[str, str],
        functions: TemplateFunctions,
        *,
        autoescape: bool,
    ) -> None:
        self._root = root
        self._autoescape = autoescape
        self._environment = Environment(
            loader=DictLoader(dict(sources)),
            autoescape=autoescape,
            auto_reload=False,
            cache_size=-1,
            keep_trailing_newline=True,
        )
        self._environment.globals.update(functions)
        self._environment.filters.update(functions)
        self._templates = {
            n: self._environment.get_template(n) for n in sources
        }

    @property
    def media_type(self) -> str:
        """Media type of the rendered output."""
        return "text/html" if self._autoescape else "text/plain"

    @property
    def name(self) -> str:
        """Base name of the root template."""
        return self._root

    def render(self, sink: TextSink, data: Any) -> None:
        """Render the root template into ``sink``.

        Parameters
        ----------
        sink
            Where to write the output. Output is written in chunks as it is
            produced.
        data
            Data for the template. See `render_named`.
        """
        self.render_named(sink, self._root, data)

    def render_named(self, sink: TextSink, name: str, data: Any) -> None:
        """Render a file or block of this unit into ``sink``.

        Parameters
        ----------
        sink
            Where to write the output.
        name
            Base name of one of the files in this unit or, failing that, name
            of a ``{% block %}`` defined in any of them.
        data
            Data for the template. A mapping is used directly as the template
            context, pydantic models and dataclasses contribute their fields,
            and `None` means an empty context.

        Raises
        ------
        TemplateNotFoundError
            Raised if no file or block of that name exists in this unit.
        TypeError
            Raised if ``data`` cannot be used as a template context.
        jinja2.TemplateError
            Raised if rendering fails. Partial output may have been written.
        """
        context = _build_context(data)
        template = self._templates.get(name)
        if template is not None:
            for chunk in template.generate(context):
                sink.write(chunk)
            return
        for template in self._templates.values():
            block = template.blocks.get(name)
            if block is not None:
                for chunk in block(template.new_context(context)):
                    sink.write(chunk)
                return
        raise TemplateNotFoundError(name)


def html_source(
    name: str, functions: TemplateFunctions, files: list[Path]
) -> JinjaTemplate:
    """Compile files into a template whose output is escaped for HTML.

    The root of the resulting template is the first file. Use this for any
    template whose data may include untrusted input.

    Parameters
    ----------
    name
        Logical name of the template, used in error messages.
    functions
        Callables made available inside the template.
    files
        Files to compile together.

    Returns
    -------
    JinjaTemplate
        The compiled template.

    Raises
    ------
    TemplateCompileError
        Raised if the files cannot be read or compiled.
    """
    if not files:
        msg = f"No files configured for template {name}"
        raise TemplateCompileError(msg)
    return _compile(name, files[0].name, functions, files, autoescape=True)


def text_source(
    name: str, functions: TemplateFunctions, files: list[Path]
) -> JinjaTemplate:
    """Compile files into a template with no output escaping.

    The root of the resulting template is the file whose base name matches
    the logical name, or the first file if none does. Only use this for
    non-HTML output or fully trusted data.

    Parameters
    ----------
    name
        Logical name of the template.
    functions
        Callables made available inside the template.
    files
        Files to compile together.

    Returns
    -------
    JinjaTemplate
        The compiled template.

    Raises
    ------
    TemplateCompileError
        Raised if the files cannot be read or compiled.
    """
    if not files:
        msg = f"No files configured for template {name}"
        raise TemplateCompileError(msg)
    names = [f.name for f in files]
    root = name if name in names else names[0]
    return _compile(name, root, functions, files, autoescape=False)


def _build_context(data: Any) -> dict[str, Any]:
    """Convert render data into a Jinja2 context."""
    if data is None:
        return {}
    elif isinstance(data, Mapping):
        return dict(data)
    elif isinstance(data, BaseModel):
        return {k: getattr(data, k) for k in type(data).model_fields}
    elif dataclasses.is_dataclass(data) and not isinstance(data, type):
        fields = dataclasses.fields(data)
        return {f.name: getattr(data, f.name) for f in fields}
    else:
        msg = f"Cannot render template with {type(data).__name__} data"
        raise TypeError(msg)


def _compile(
    name: str,
    root: str,
    functions: TemplateFunctions,
    files: list[Path],
    *,
    autoescape: bool,
) -> JinjaTemplate:
    """Read and compile the files of one template unit."""
    sources = {}
    for path in files:
        try:
            sources[path.name] = path.read_text(encoding="utf-8")
        except OSError as e:
            msg = f"Cannot read {path} for template {name}: {e}"
            raise TemplateCompileError(msg) from e
    try:
        return JinjaTemplate(root, sources, functions, autoescape=autoescape)
    except TemplateError as e:
        msg = f"Cannot compile template {name}: {e}"
        raise TemplateCompileError(msg) from e
