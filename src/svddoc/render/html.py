"""Render page contexts to HTML.

Every piece of markup is a named string.Template, so callers can swap the
look of a page by passing replacement templates as keywords, e.g.
HtmlRenderer(field="<li>$name ($access) $description</li>").
Placeholders receive already escaped text.
"""

from __future__ import annotations

import html
from string import Template
from typing import Callable, Union

from svddoc.layout.bit_spans import REGISTER_BITS
from svddoc.pages.context import IndexPage, PeripheralPage, RegisterEntry
from svddoc.pages.writer import INDEX_PAGE, PAGE_SUFFIX, PageRenderer

PageContext = Union[PeripheralPage, IndexPage]

STYLE = """<style type="text/css">
body {
    font-family: "Segoe UI", Tahoma, Geneva, Verdana, sans-serif;
    margin: 16px;
}

h1 {
    background: white;
    position: sticky;
    top: 0;
}

table, td {
    width: 100%;
    border-collapse: collapse;
}

table td {
    width: 1%;
    border: 1px solid black;
    text-align: center;
}

table td.header {
    writing-mode: vertical-lr;
    transform: rotate(180deg) translate(0px, 8px);
    width: 1%;
    border: none;
    text-align: start;
}

a {
    color: black;
}
</style>"""

DEFAULT_TEMPLATES: dict[str, str] = {
    "peripheral": """<html><head><title>$name</title>
$style
</head><body>
<p><a href="$index">Peripheral List</a></p>
<h1>$name (Base $base_address)</h1>
<p>$description</p>
$interrupts$registers</body></html>
""",
    "interrupts": "<h2>Peripheral Interrupts</h2>\n$interrupts</br>\n",
    "interrupt": "<p><b>$name</b> <i>$value</i> $description</p>\n",
    "register": """<h2>$name (Offset $offset Absolute $address)</h2>
<p>$description</p>
<table>
<tr>
$header</tr>
<tr>
$spans</tr>
<tr>
$bits</tr>
</table>
$fields</br>
""",
    "header_cell": '<td class="header">$text</td>\n',
    "span_cell": '<td colspan="$width">$text</td>\n',
    "bit_cell": "<td>$bit</td>\n",
    "field": "<p><b>$name</b> <i>$access</i> $description</p>\n",
    "index": """<html><head><title>$device</title>
$style
</head><body>
<h1>Peripheral List</h1>
$peripherals</body></html>
""",
    "index_entry": '<p><a href="$file">$name</a> $description</p>\n',
}


def _e(text: str) -> str:
    return html.escape(text, quote=True)


class HtmlRenderer(PageRenderer):
    def __init__(self, style: str = STYLE, **keywords: str):
        unknown = set(keywords) - set(DEFAULT_TEMPLATES)
        if unknown:
            raise KeyError(f"unknown template(s): {', '.join(sorted(unknown))}")
        self.style = style
        self.templates = {
            name: Template(keywords.get(name, default)) for name, default in DEFAULT_TEMPLATES.items()
        }
        self._pages: dict[str, Callable] = {
            "peripheral": self.render_peripheral,
            "index": self.render_index,
        }

    def render(self, template: str, context: PageContext) -> str:
        try:
            page = self._pages[template]
        except KeyError:
            raise KeyError(f"no page template named {template!r}") from None
        return page(context)

    def _sub(self, template: str, /, **values) -> str:
        return self.templates[template].substitute(values)

    def render_register(self, reg: RegisterEntry) -> str:
        header = "".join(self._sub("header_cell", text=_e(t)) for t in reg.header)
        spans = "".join(
            self._sub("span_cell", width=r.width, text=_e(r.range_text)) for r in reg.records
        )
        bits = "".join(self._sub("bit_cell", bit=b) for b in reversed(range(REGISTER_BITS)))
        fields = "".join(
            self._sub("field", name=_e(r.label), access=_e(r.access_text), description=_e(r.description))
            for r in reg.fields
        )
        return self._sub(
            "register",
            name=_e(reg.name),
            offset=reg.offset,
            address=reg.address,
            description=_e(reg.description),
            header=header,
            spans=spans,
            bits=bits,
            fields=fields,
        )

    def render_peripheral(self, page: PeripheralPage) -> str:
        interrupts = ""
        if page.interrupts:
            lines = "".join(
                self._sub("interrupt", name=_e(i.name), value=_e(i.value), description=_e(i.description))
                for i in page.interrupts
            )
            interrupts = self._sub("interrupts", interrupts=lines)
        return self._sub(
            "peripheral",
            style=self.style,
            index=_e(f"{INDEX_PAGE}{PAGE_SUFFIX}"),
            name=_e(page.name),
            base_address=page.base_address,
            description=_e(page.description),
            interrupts=interrupts,
            registers="".join(self.render_register(r) for r in page.registers),
        )

    def render_index(self, page: IndexPage) -> str:
        entries = "".join(
            self._sub(
                "index_entry",
                file=_e(f"{p.name}{PAGE_SUFFIX}"),
                name=_e(p.name),
                description=_e(p.description),
            )
            for p in page.peripherals
        )
        return self._sub("index", style=self.style, device=_e(page.device), peripherals=entries)
