"""
Admin template extension.

Jinja2 filters rendering field values of domain objects in list and show
pages, comparing two objects field by field, resolving labels of related
objects and exposing inline-edit (x-editable) metadata.

Filters:
- render_list_element: ``object|render_list_element(field_description, params)``
- render_view_element: ``field_description|render_view_element(object)``
- render_view_element_compare: ``field_description|render_view_element_compare(base, compare)``
- render_relation_element: ``element|render_relation_element(field_description)``
- urlsafe_id: ``object|urlsafe_id(admin)``
- xeditable_type: ``field_description.type|xeditable_type``
- xeditable_choices: ``field_description|xeditable_choices``

Dependencies: jinja2, markupsafe, backoffice.admin
System role: Presentation glue between templates and admin metadata
"""

import logging
import numbers
import warnings
from collections.abc import Mapping
from typing import Any, Callable

from jinja2 import Environment, Template, pass_environment
from markupsafe import Markup

from backoffice.admin.admin import Admin
from backoffice.admin.field_description import FieldDescription
from backoffice.admin.model_manager import get_real_class
from backoffice.admin.pool import Pool
from backoffice.core.exceptions import AdminConfigurationError, NoValueException
from backoffice.observability.log_utils import log_with_context

DEFAULT_SHOW_TEMPLATE = "CRUD/base_show_field.html"

DEBUG_COMMENT_TEMPLATE = """
<!-- START
    fieldName: {field_name}
    template: {template}
    compiled template: {compiled_template}
    -->
    {content}
<!-- END - fieldName: {field_name} -->"""

# Values a relation label is never computed for
_NON_OBJECT_TYPES = (str, bytes, numbers.Number, list, tuple, dict, set, frozenset)


def is_debug(environment: Environment) -> bool:
    """Whether rendered fields get wrapped in debug comments."""
    return bool(getattr(environment, "debug", False))


class AdminExtension:
    """Template filters for rendering admin fields."""

    name = "backoffice_admin"

    def __init__(
        self,
        pool: Pool,
        logger: logging.Logger | None = None,
        translator: Any = None,
        base_show_template: str = DEFAULT_SHOW_TEMPLATE,
    ) -> None:
        """
        Initialize extension.

        Args:
            pool: Admin registry, used for class lookups and property access
            logger: Logger, defaults to this module's logger
            translator: Optional object exposing ``trans(message, parameters, domain)``
            base_show_template: Template for show cells of fields without one
        """
        self.pool = pool
        self.logger = logger or logging.getLogger(__name__)
        self.translator = translator
        self.base_show_template = base_show_template
        self.xeditable_type_mapping: dict[str, str] = {}

    def get_filters(self) -> dict[str, Callable[..., Any]]:
        """Return filter name to callable."""
        return {
            "render_list_element": self.render_list_element,
            "render_view_element": self.render_view_element,
            "render_view_element_compare": self.render_view_element_compare,
            "render_relation_element": self.render_relation_element,
            "urlsafe_id": self.get_urlsafe_identifier,
            "xeditable_type": self.get_xeditable_type,
            "xeditable_choices": self.get_xeditable_choices,
        }

    def install(self, environment: Environment) -> Environment:
        """Register the filters on a Jinja2 environment."""
        environment.filters.update(self.get_filters())
        return environment

    @pass_environment
    def render_list_element(
        self,
        environment: Environment,
        obj: Any,
        field_description: FieldDescription,
        params: dict[str, Any] | None = None,
    ) -> Markup:
        """
        Render a list cell for one field of an object.

        Args:
            environment: Rendering environment
            obj: Object of the current row
            field_description: Field to render
            params: Extra template context, overridden by the standard keys

        Returns:
            Markup: Rendered cell
        """
        admin = field_description.admin
        template = self._get_template(
            field_description,
            admin.get_template("base_list_field"),
            environment,
        )

        parameters = dict(params or {})
        parameters.update({
            "admin": admin,
            "object": obj,
            "value": self._get_value_from_field_description(obj, field_description),
            "field_description": field_description,
        })
        return self._output(field_description, template, parameters, environment)

    @pass_environment
    def render_view_element(
        self,
        environment: Environment,
        field_description: FieldDescription,
        obj: Any,
    ) -> Markup:
        """
        Render a show cell for one field of an object.

        Returns:
            Markup: Rendered cell
        """
        template = self._get_template(field_description, self.base_show_template, environment)

        try:
            value = field_description.get_value(obj)
        except NoValueException:
            value = None

        return self._output(field_description, template, {
            "field_description": field_description,
            "object": obj,
            "value": value,
            "admin": field_description.admin,
        }, environment)

    @pass_environment
    def render_view_element_compare(
        self,
        environment: Environment,
        field_description: FieldDescription,
        base_object: Any,
        compare_object: Any,
    ) -> Markup:
        """
        Render one field of two objects side by side.

        Both values are first rendered alone through the same template; the
        field differs when those renders differ. The final output gets both
        values and the ``is_diff`` flag.

        Returns:
            Markup: Rendered comparison cell
        """
        template = self._get_template(field_description, self.base_show_template, environment)

        try:
            base_value = field_description.get_value(base_object)
        except NoValueException:
            base_value = None

        try:
            compare_value = field_description.get_value(compare_object)
        except NoValueException:
            compare_value = None

        base_value_output = template.render({
            "admin": field_description.admin,
            "field_description": field_description,
            "value": base_value,
        })
        compare_value_output = template.render({
            "field_description": field_description,
            "admin": field_description.admin,
            "value": compare_value,
        })

        # Compare the rendered output so overridden field blocks decide what counts as different
        is_diff = base_value_output != compare_value_output

        return self._output(field_description, template, {
            "field_description": field_description,
            "value": base_value,
            "value_compare": compare_value,
            "is_diff": is_diff,
            "admin": field_description.admin,
        }, environment)

    def render_relation_element(self, element: Any, field_description: FieldDescription) -> Any:
        """
        Return the display label of a related object.

        Non-objects (None, strings, numbers, containers) are returned as is.

        Args:
            element: Related object
            field_description: Field holding the relation

        Returns:
            Any: Label, from ``associated_property`` when set, otherwise from
                the ``associated_tostring`` method or ``str(element)``

        Raises:
            AdminConfigurationError: If no label source is available
        """
        if element is None or isinstance(element, _NON_OBJECT_TYPES):
            return element

        property_path = field_description.get_option("associated_property")

        if property_path is None:
            method_name = field_description.get_option("associated_tostring")

            if method_name:
                warnings.warn(
                    'Option "associated_tostring" is deprecated. '
                    'Use "associated_property" instead.',
                    DeprecationWarning,
                    stacklevel=2,
                )
                method = getattr(element, method_name, None)
                if not callable(method):
                    raise self._relation_label_error(element, field_description, method_name)
                return method()

            if type(element).__str__ is object.__str__:
                raise self._relation_label_error(element, field_description, "__str__")
            return str(element)

        if callable(property_path):
            return property_path(element)

        return self.pool.get_property_accessor().get_value(element, property_path)

    def get_urlsafe_identifier(self, model: Any, admin: Admin | None = None) -> str | None:
        """
        Get the identifier of a model as a string safe to use in a URL.

        Args:
            model: Domain object
            admin: Admin of the model, looked up by class when omitted

        Returns:
            str | None: Encoded identifier
        """
        if admin is None:
            admin = self.pool.get_admin_by_class(get_real_class(model))

        return admin.get_urlsafe_identifier(model)

    def set_xeditable_type_mapping(self, xeditable_type_mapping: dict[str, str]) -> None:
        self.xeditable_type_mapping = dict(xeditable_type_mapping)

    def get_xeditable_type(self, type_name: str | None) -> str | bool:
        """Return the inline-edit widget type for a field type, False when unmapped."""
        return self.xeditable_type_mapping.get(type_name, False)

    def get_xeditable_choices(self, field_description: FieldDescription) -> list[Any]:
        """
        Return inline-edit choices from the ``choices`` and ``catalogue`` options.

        With the choice option ``{"Status1": "Alias1", "Status2": "Alias2"}`` the
        result is ``[{"value": "Status1", "text": "Alias1"}, {"value": "Status2", "text": "Alias2"}]``.
        Choices already in that shape are returned unchanged. A list uses each
        item's position as its value.
        """
        choices = field_description.get_option("choices", {})
        catalogue = field_description.get_option("catalogue")

        if not choices:
            return []

        if isinstance(choices, Mapping):
            items = list(choices.items())
        else:
            items = list(enumerate(choices))
        values = [text for _, text in items]

        first = values[0]
        # the choices are already in the right format
        if isinstance(first, Mapping) and "value" in first and "text" in first:
            return values

        xeditable_choices = []
        for value, text in items:
            if catalogue:
                if self.translator is not None:
                    text = self.translator.trans(text, {}, catalogue)
                elif hasattr(field_description.admin, "trans"):
                    text = field_description.admin.trans(text, {}, catalogue)

            xeditable_choices.append({
                "value": value,
                "text": text,
            })

        return xeditable_choices

    def _output(
        self,
        field_description: FieldDescription,
        template: Template,
        parameters: dict[str, Any],
        environment: Environment,
    ) -> Markup:
        content = template.render(parameters)

        if is_debug(environment):
            content = DEBUG_COMMENT_TEMPLATE.format(
                field_name=field_description.field_name,
                template=field_description.template or "",
                compiled_template=template.name,
                content=content,
            )

        return Markup(content)

    def _get_value_from_field_description(
        self,
        obj: Any,
        field_description: FieldDescription,
    ) -> Any:
        """
        Return the field value; a missing association becomes a new instance
        from the association admin, when the field has one.
        """
        try:
            return field_description.get_value(obj)
        except NoValueException as e:
            log_with_context(
                self.logger,
                logging.DEBUG,
                "No value for field",
                field_name=field_description.name,
                object=obj,
                reason=e.message,
            )
            if field_description.association_admin is not None:
                return field_description.association_admin.get_new_instance()
            return None

    def _get_template(
        self,
        field_description: FieldDescription,
        default_template: str,
        environment: Environment,
    ) -> Template:
        template_name = field_description.template or default_template
        return environment.get_template(template_name)

    def _relation_label_error(
        self,
        element: Any,
        field_description: FieldDescription,
        method_name: str,
    ) -> AdminConfigurationError:
        admin_code = field_description.admin.code if field_description.admin else None
        return AdminConfigurationError(
            f"You must define an `associated_property` option or create a "
            f"`{type(element).__name__}.{method_name}` method to the field option "
            f"{field_description.name} from service {admin_code}",
            field=field_description.name,
            admin_code=admin_code,
            details={"element_class": type(element).__name__},
        )
