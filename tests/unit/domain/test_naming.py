"""Unit tests for NameScheme."""

import pytest

from handlergen.domain.naming import NameScheme


class TestUpperCamelCase:
    """Test identifier conversion used for message names."""

    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            ("inc", "Inc"),
            ("get_balance", "GetBalance"),
            ("getBalance", "GetBalance"),
            ("get-balance", "GetBalance"),
            ("HTTPServer", "HttpServer"),
            ("_private_call", "PrivateCall"),
            ("transfer2", "Transfer2"),
            ("ABC", "Abc"),
        ],
    )
    def test_conversion(self, identifier: str, expected: str) -> None:
        assert NameScheme.upper_camel_case(identifier) == expected


class TestNameScheme:
    """Test derived declaration names."""

    def test_client_and_factory_names(self) -> None:
        names = NameScheme("Counter")
        assert names.client == "CounterClient"
        assert names.client_factory == "CounterClientFactory"

    def test_message_name_prefixes_handler(self) -> None:
        names = NameScheme("Bank")
        assert names.message("send") == "BankSendMsg"
        assert names.message("balance_of") == "BankBalanceOfMsg"
