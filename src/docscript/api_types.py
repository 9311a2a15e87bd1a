"""Google Docs API models for the parts of a document that docscript reads.

Only the resources the compiler walks are declared. Every model allows extra
fields, so style payloads carry API fields that are not modelled here through
a ``model_dump(by_alias=True, exclude_none=True)`` unchanged.
"""

from __future__ import annotations

from enum import Enum, StrEnum

from pydantic import BaseModel, ConfigDict, Field


class DimensionUnit(StrEnum):
    """The units for magnitude."""

    UNIT_UNSPECIFIED = "UNIT_UNSPECIFIED"
    PT = "PT"


class SectionType(StrEnum):
    """The type of a section."""

    SECTION_TYPE_UNSPECIFIED = "SECTION_TYPE_UNSPECIFIED"
    CONTINUOUS = "CONTINUOUS"
    NEXT_PAGE = "NEXT_PAGE"


class Dimension(BaseModel):
    """A magnitude in a single direction in the specified units."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    magnitude: float | None = Field(None)
    unit: DimensionUnit | None = Field(None)


class Size(BaseModel):
    """A width and height."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    height: Dimension | None = Field(None)
    width: Dimension | None = Field(None)


class DocumentStyle(BaseModel):
    """The style of the document."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    flip_page_orientation: bool | None = Field(None, alias="flipPageOrientation")
    margin_bottom: Dimension | None = Field(None, alias="marginBottom")
    margin_left: Dimension | None = Field(None, alias="marginLeft")
    margin_right: Dimension | None = Field(None, alias="marginRight")
    margin_top: Dimension | None = Field(None, alias="marginTop")
    page_size: Size | None = Field(None, alias="pageSize")


class SectionStyle(BaseModel):
    """The styling that applies to a section."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    flip_page_orientation: bool | None = Field(None, alias="flipPageOrientation")
    margin_bottom: Dimension | None = Field(None, alias="marginBottom")
    margin_footer: Dimension | None = Field(None, alias="marginFooter")
    margin_header: Dimension | None = Field(None, alias="marginHeader")
    margin_left: Dimension | None = Field(None, alias="marginLeft")
    margin_right: Dimension | None = Field(None, alias="marginRight")
    margin_top: Dimension | None = Field(None, alias="marginTop")
    page_number_start: int | None = Field(None, alias="pageNumberStart")
    section_type: SectionType | None = Field(None, alias="sectionType")
    use_first_page_header_footer: bool | None = Field(
        None, alias="useFirstPageHeaderFooter"
    )


class SectionBreak(BaseModel):
    """A section break. The section style applies to the section after it."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    section_style: SectionStyle | None = Field(None, alias="sectionStyle")


class TextStyle(BaseModel):
    """Character-level styling. Fields not modelled here are kept as extras."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    bold: bool | None = Field(None)
    font_size: Dimension | None = Field(None, alias="fontSize")
    italic: bool | None = Field(None)
    underline: bool | None = Field(None)


class ParagraphStyle(BaseModel):
    """Paragraph-level styling. Fields not modelled here are kept as extras."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    heading_id: str | None = Field(None, alias="headingId")
    line_spacing: float | None = Field(None, alias="lineSpacing")
    named_style_type: str | None = Field(None, alias="namedStyleType")
    space_above: Dimension | None = Field(None, alias="spaceAbove")
    space_below: Dimension | None = Field(None, alias="spaceBelow")


class TextRun(BaseModel):
    """A run of text that all has the same styling."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    content: str | None = Field(None)
    text_style: TextStyle | None = Field(None, alias="textStyle")


class InlineObjectElement(BaseModel):
    """A ParagraphElement that contains an InlineObject."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    inline_object_id: str | None = Field(None, alias="inlineObjectId")
    text_style: TextStyle | None = Field(None, alias="textStyle")


class PageBreak(BaseModel):
    """A ParagraphElement representing a page break."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    text_style: TextStyle | None = Field(None, alias="textStyle")


class ParagraphElement(BaseModel):
    """A ParagraphElement describes content within a Paragraph.

    Element variants that docscript cannot rebuild are accepted as extras and
    reported by name through ``unsupported_kind``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    end_index: int | None = Field(None, alias="endIndex")
    inline_object_element: InlineObjectElement | None = Field(
        None, alias="inlineObjectElement"
    )
    page_break: PageBreak | None = Field(None, alias="pageBreak")
    start_index: int | None = Field(None, alias="startIndex")
    text_run: TextRun | None = Field(None, alias="textRun")

    @property
    def unsupported_kind(self) -> str | None:
        """Name of the first element variant carried as an extra field."""
        for key, value in (self.model_extra or {}).items():
            if value is not None:
                return key
        return None


class Paragraph(BaseModel):
    """A range of content that's terminated with a newline character."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    elements: list[ParagraphElement] | None = Field(None)
    paragraph_style: ParagraphStyle | None = Field(None, alias="paragraphStyle")


class TableCellStyle(BaseModel):
    """The style of a TableCell."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    column_span: int | None = Field(None, alias="columnSpan")
    row_span: int | None = Field(None, alias="rowSpan")


class TableCell(BaseModel):
    """The contents and style of a cell in a Table."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    content: list[StructuralElement] | None = Field(None)
    end_index: int | None = Field(None, alias="endIndex")
    start_index: int | None = Field(None, alias="startIndex")
    table_cell_style: TableCellStyle | None = Field(None, alias="tableCellStyle")


class TableRowStyle(BaseModel):
    """Styles that apply to a table row."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    min_row_height: Dimension | None = Field(None, alias="minRowHeight")


class TableRow(BaseModel):
    """The contents and style of a row in a Table."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    end_index: int | None = Field(None, alias="endIndex")
    start_index: int | None = Field(None, alias="startIndex")
    table_cells: list[TableCell] | None = Field(None, alias="tableCells")
    table_row_style: TableRowStyle | None = Field(None, alias="tableRowStyle")


class TableColumnProperties(BaseModel):
    """The properties of a column in a table."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    width: Dimension | None = Field(None)
    width_type: str | None = Field(None, alias="widthType")


class TableStyle(BaseModel):
    """Styles that apply to a table."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    table_column_properties: list[TableColumnProperties] | None = Field(
        None, alias="tableColumnProperties"
    )


class Table(BaseModel):
    """A StructuralElement representing a table."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    columns: int | None = Field(None)
    rows: int | None = Field(None)
    table_rows: list[TableRow] | None = Field(None, alias="tableRows")
    table_style: TableStyle | None = Field(None, alias="tableStyle")


class StructuralElement(BaseModel):
    """A StructuralElement describes content that provides structure to the document."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    end_index: int | None = Field(None, alias="endIndex")
    paragraph: Paragraph | None = Field(None)
    section_break: SectionBreak | None = Field(None, alias="sectionBreak")
    start_index: int | None = Field(None, alias="startIndex")
    table: Table | None = Field(None)
    table_of_contents: dict | None = Field(None, alias="tableOfContents")


class Body(BaseModel):
    """The document body."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    content: list[StructuralElement] | None = Field(None)


class ImageProperties(BaseModel):
    """The properties of an image."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    content_uri: str | None = Field(None, alias="contentUri")
    source_uri: str | None = Field(None, alias="sourceUri")


class EmbeddedObject(BaseModel):
    """An embedded object in the document."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    description: str | None = Field(None)
    image_properties: ImageProperties | None = Field(None, alias="imageProperties")
    size: Size | None = Field(None)
    title: str | None = Field(None)


class InlineObjectProperties(BaseModel):
    """Properties of an InlineObject."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    embedded_object: EmbeddedObject | None = Field(None, alias="embeddedObject")


class InlineObject(BaseModel):
    """An object that appears inline with text, such as an image."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    inline_object_properties: InlineObjectProperties | None = Field(
        None, alias="inlineObjectProperties"
    )
    object_id: str | None = Field(None, alias="objectId")


class TabProperties(BaseModel):
    """Properties of a tab."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    index: int | None = Field(None)
    tab_id: str | None = Field(None, alias="tabId")
    title: str | None = Field(None)


class DocumentTab(BaseModel):
    """A tab with document contents."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    body: Body | None = Field(None)
    document_style: DocumentStyle | None = Field(None, alias="documentStyle")
    inline_objects: dict[str, InlineObject] | None = Field(None, alias="inlineObjects")


class Tab(BaseModel):
    """A tab in a document."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    child_tabs: list[Tab] | None = Field(None, alias="childTabs")
    document_tab: DocumentTab | None = Field(None, alias="documentTab")
    tab_properties: TabProperties | None = Field(None, alias="tabProperties")


class Document(BaseModel):
    """A Google Docs document."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    body: Body | None = Field(None)
    document_id: str | None = Field(None, alias="documentId")
    document_style: DocumentStyle | None = Field(None, alias="documentStyle")
    inline_objects: dict[str, InlineObject] | None = Field(None, alias="inlineObjects")
    revision_id: str | None = Field(None, alias="revisionId")
    tabs: list[Tab] | None = Field(None)
    title: str | None = Field(None)


class ElementKind(Enum):
    """The variant a StructuralElement carries."""

    PARAGRAPH = "paragraph"
    SECTION_BREAK = "sectionBreak"
    TABLE = "table"
    UNSUPPORTED = "unsupported"


def classify_element(element: StructuralElement) -> ElementKind:
    """Return which variant of the structural element union is populated.

    Table of contents elements, and elements carrying none of the known
    variants, are ``UNSUPPORTED``.
    """
    if element.paragraph is not None:
        return ElementKind.PARAGRAPH
    if element.section_break is not None:
        return ElementKind.SECTION_BREAK
    if element.table is not None:
        return ElementKind.TABLE
    return ElementKind.UNSUPPORTED
