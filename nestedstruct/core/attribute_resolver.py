"""Distributes @nested(...) attributes from fields onto their child structs."""

from nestedstruct.core.model import Attribute, FieldSpec, NestedMarker, StructSpec
from nestedstruct.exceptions import AttributeOrderError, MisplacedMarkerError
from nestedstruct.utils.logging_utils import get_logger

MARKER_POSITIONS = ("before", "after")


class AttributeResolver:
    """
    Splits each field's leading-attribute run into field attributes and
    attributes for the nested struct the field introduces.

    Within a run, every ``@nested(...)`` marker must sit in one contiguous
    block at the configured end: after all ordinary attributes (``"after"``)
    or before them (``"before"``).
    """

    def __init__(self, marker_position: str = "after"):
        if marker_position not in MARKER_POSITIONS:
            raise ValueError(
                f"marker_position must be one of {MARKER_POSITIONS}, got: {marker_position}"
            )
        self.marker_position = marker_position
        self.logger = get_logger(f"nestedstruct.{self.__class__.__name__}")

    def resolve(self, root: StructSpec) -> StructSpec:
        """Resolve every field of ``root`` and its descendants in place."""
        moved = 0
        for spec in root.walk():
            for field in spec.fields:
                moved += self._resolve_field(spec, field)
        self.logger.debug(f"Moved {moved} attribute(s) onto nested structs of {root.name}")
        return root

    def _resolve_field(self, owner: StructSpec, field: FieldSpec) -> int:
        markers = field.markers
        if not markers:
            field.leading = []
            return 0

        context = {"struct_name": owner.name, "field_name": field.name}
        if not field.is_nested:
            marker = markers[0]
            raise MisplacedMarkerError(
                f"@nested(...) on field {field.name!r}, whose type is not a nested struct",
                line=marker.line,
                column=marker.column,
                **context,
            )

        self._check_order(field, context)

        attributes = [attr for marker in markers for attr in marker.attributes]
        field.child.struct_attributes.extend(attributes)
        field.field_attributes = [item for item in field.leading if isinstance(item, Attribute)]
        field.leading = []
        return len(attributes)

    def _check_order(self, field: FieldSpec, context: dict) -> None:
        kinds = [isinstance(item, NestedMarker) for item in field.leading]
        if self.marker_position == "before":
            # Markers first: once an attribute is seen no marker may follow
            kinds = [not is_marker for is_marker in kinds]
        last_marker = None
        seen_second_kind = False
        for item, is_second_kind in zip(field.leading, kinds):
            if isinstance(item, NestedMarker):
                last_marker = item
            if is_second_kind:
                seen_second_kind = True
            elif seen_second_kind:
                # Report the marker that is out of place
                offender = item if isinstance(item, NestedMarker) else last_marker
                raise AttributeOrderError(
                    f"@nested(...) markers on field {field.name!r} must come "
                    f"{self.marker_position} its other attributes",
                    line=offender.line,
                    column=offender.column,
                    **context,
                )


def resolve_attributes(root: StructSpec, marker_position: str = "after") -> StructSpec:
    """Resolve @nested(...) markers across the tree rooted at ``root``."""
    return AttributeResolver(marker_position=marker_position).resolve(root)
