"""Tests for identifier casing."""

from zodgen.naming import camel, params_name, pascal, split_words


def test_split_words():
    """Test splitting on separators and case boundaries."""
    assert split_words("get-widget_by id") == ["get", "widget", "by", "id"]
    assert split_words("HTTPResponseCode") == ["HTTP", "Response", "Code"]
    assert split_words("") == []


def test_pascal():
    """Test PascalCase conversion."""
    assert pascal("widget_size") == "WidgetSize"
    assert pascal("getWidgets") == "GetWidgets"
    assert pascal("Widget") == "Widget"


def test_camel():
    """Test camelCase conversion."""
    assert camel("created-at") == "createdAt"
    assert camel("UserID") == "userId"
    assert camel("limit") == "limit"


def test_params_name():
    """Test parameter bag naming."""
    assert params_name("getWidgets") == "GetWidgetsParams"
