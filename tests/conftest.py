"""Shared test fixtures for gldoc."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

# A DocBook 5 reference page with every recognized section.
GLFOO_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE refentry [ <!ENTITY % mathent SYSTEM "math.ent"> %mathent; ]>
<refentry xmlns="http://docbook.org/ns/docbook" version="5.0" xml:id="glFoo">
    <info>
        <copyright><year>2024</year><holder>Example</holder></copyright>
    </info>
    <refmeta>
        <refentrytitle>glFoo</refentrytitle>
        <manvolnum>3G</manvolnum>
    </refmeta>
    <refnamediv>
        <refname>glFoo</refname>
        <refpurpose>does foo</refpurpose>
    </refnamediv>
    <refsynopsisdiv><title>C Specification</title>
        <funcsynopsis>
            <funcprototype>
                <funcdef>void <function>glFoo</function></funcdef>
                <paramdef>GLint <parameter>x</parameter></paramdef>
                <paramdef>GLint <parameter>y</parameter></paramdef>
            </funcprototype>
        </funcsynopsis>
    </refsynopsisdiv>
    <refsect1 xml:id="parameters"><title>Parameters</title>
        <variablelist>
        <varlistentry>
            <term><parameter>x</parameter></term>
            <listitem>
                <para>
                    Specifies the <emphasis>horizontal</emphasis>
                    coordinate.
                </para>
            </listitem>
        </varlistentry>
        <varlistentry>
            <term><parameter>y</parameter></term>
            <listitem>
                <para>Specifies the vertical coordinate.</para>
            </listitem>
        </varlistentry>
        </variablelist>
    </refsect1>
    <refsect1 xml:id="description"><title>Description</title>
        <para>Long text that is not kept.</para>
    </refsect1>
    <refsect1 xml:id="errors"><title>Errors</title>
        <para><constant>GL_INVALID_ENUM</constant> is generated if ...</para>
        <para><constant>GL_INVALID_VALUE</constant> is generated if
            <parameter>x</parameter> is negative.</para>
        <para><constant>GL_BOGUS</constant> is not a real error.</para>
        <para><constant>GL_INVALID_ENUM</constant> again.</para>
    </refsect1>
    <refsect1 xml:id="seealso"><title>See Also</title>
        <para>
            <citerefentry><refentrytitle>glBar</refentrytitle></citerefentry>
        </para>
    </refsect1>
</refentry>
"""


def page(
    body: str,
    *,
    root_id: str | None = None,
    namespace: bool = True,
) -> str:
    """Wrap *body* in a ``refentry`` root element."""
    attrs = ' xmlns="http://docbook.org/ns/docbook" version="5.0"' if namespace else ""
    if root_id is not None:
        attrs += f' xml:id="{root_id}"' if namespace else f' id="{root_id}"'
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<refentry{attrs}>\n{body}\n</refentry>\n'


def prototype(name: str, *args: str) -> str:
    params = "".join(
        f"<paramdef>GLint <parameter>{arg}</parameter></paramdef>" for arg in args
    )
    return (
        "<funcprototype>"
        f"<funcdef>void <function>{name}</function></funcdef>{params}"
        "</funcprototype>"
    )


def synopsis(*prototypes: str) -> str:
    return f"<refsynopsisdiv><funcsynopsis>{''.join(prototypes)}</funcsynopsis></refsynopsisdiv>"


@pytest.fixture()
def corpus(tmp_path: Path) -> Path:
    """Create an empty corpus root with ``gl4`` and ``gl2.1`` subsets."""
    root = tmp_path / "refpages"
    (root / "gl4").mkdir(parents=True)
    (root / "gl2.1").mkdir()
    return root


@pytest.fixture()
def glfoo_corpus(corpus: Path) -> Path:
    """A corpus whose ``gl4`` subset holds ``glFoo`` and a two-function page."""
    (corpus / "gl4" / "glFoo.xml").write_text(GLFOO_XML, encoding="utf-8")
    (corpus / "gl4" / "glUniform.xml").write_text(
        page(
            "<refnamediv><refname>glUniform</refname>"
            "<refpurpose>Specify the value of a uniform variable</refpurpose></refnamediv>"
            + synopsis(
                prototype("glUniform1f", "location", "v0"),
                prototype("glUniform2f", "location", "v0", "v1"),
            ),
            root_id="glUniform",
        ),
        encoding="utf-8",
    )
    (corpus / "gl2.1" / "glBegin.xml").write_text(
        page(
            "<refnamediv><refname>glBegin</refname>"
            "<refpurpose>delimit the vertices of a primitive</refpurpose></refnamediv>"
            + synopsis(prototype("glBegin", "mode"), prototype("glEnd")),
            root_id="glBegin",
            namespace=False,
        ),
        encoding="utf-8",
    )
    return corpus


@pytest.fixture()
def glfoo_xml() -> str:
    return GLFOO_XML


@pytest.fixture()
def make_page() -> Callable[..., str]:
    return page


@pytest.fixture()
def make_synopsis() -> Callable[..., str]:
    """Return a builder taking ``(name, *args)`` tuples."""

    def _build(*funcs: tuple[str, ...]) -> str:
        return synopsis(*(prototype(*fn) for fn in funcs))

    return _build
