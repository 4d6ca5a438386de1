import json

import pytest

from infrastructure.commands.references import CommandReference, CommandReferenceError


class TestCommandReference:
    def test_encode_is_compact_and_drops_empty_values(self):
        reference = CommandReference(
            command="foo", parameters={"b": "2", "a": "1", "empty": "", "none": None}
        )

        encoded = reference.encode()

        assert encoded == '{"command":"foo","parameters":{"a":"1","b":"2"}}'
        assert CommandReference.decode(encoded).parameters == {"a": "1", "b": "2"}

    def test_with_parameter_returns_copy(self):
        reference = CommandReference(command="foo", parameters={"a": "1"})

        updated = reference.with_parameter("b", "2")

        assert updated.parameters == {"a": "1", "b": "2"}
        assert reference.parameters == {"a": "1"}

    def test_decode_without_parameters(self):
        reference = CommandReference.decode(json.dumps({"command": "help"}))
        assert reference.command == "help"
        assert reference.parameters == {}

    @pytest.mark.parametrize("value", ["", "not json", '{"parameters": {}}', "[1, 2]"])
    def test_decode_rejects_invalid_values(self, value):
        with pytest.raises(CommandReferenceError):
            CommandReference.decode(value)
