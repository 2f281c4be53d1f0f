from admincore.storage.message import PREFIX_KEY, Message


def test_prefix_is_empty_without_values():
    message = Message(id="1", stream="orders")
    assert message.values is None
    assert message.prefix == ""


def test_setting_prefix_creates_values():
    message = Message()
    message.prefix = "tenant"
    assert message.values == {"__host": "tenant"}
    assert message.prefix == "tenant"


def test_setting_prefix_keeps_other_values():
    message = Message(values={"key": "value"})
    message.prefix = "tenant"
    assert message.values["key"] == "value"
    assert message.values[PREFIX_KEY] == "tenant"


def test_non_string_prefix_reads_as_empty():
    message = Message(values={PREFIX_KEY: 42})
    assert message.prefix == ""


def test_new_message_has_no_errors():
    message = Message(stream="orders", values={"key": "value"})
    assert message.error_count == 0
    assert message.id == ""
    assert message.stream == "orders"