from django import template
from django.utils.html import format_html_join

register = template.Library()


@register.filter
def hide_if_attrs(bound_field):
    """data-атрибуты правил hide_if для обёртки поля"""
    rules = getattr(bound_field.form, 'hide_rules', {}).get(bound_field.name, [])
    return format_html_join(
        ' ', 'data-hide-if-field="{}" data-hide-if-condition="{}" data-hide-if-value="{}"',
        ((dependency, condition, value if value is not None else '') for dependency, condition, value in rules[:1]),
    )


@register.filter
def is_display_only(bound_field):
    return getattr(bound_field.field, 'display_only', False)
