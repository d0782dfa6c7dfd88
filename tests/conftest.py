import pytest

from json_csv_flattener.limits import ConversionLimits


@pytest.fixture
def small_limits():
    """Tight ceilings so limit paths can be hit with tiny documents."""
    return ConversionLimits(
        max_bytes=1024,
        max_depth=4,
        max_nodes=50,
        max_flatten_depth=3,
        max_array_elements=5,
        max_output_rows=8,
        max_columns=6,
    )


@pytest.fixture
def family_json():
    return (
        '[{"nome": "Carlos", "filhos": [{"nome": "Lucas"}, {"nome": "Maria"}]}]'
    )


@pytest.fixture
def contacts_json():
    return """[{
        "nome": "Ana",
        "telefones": [{"numero": "1111"}, {"numero": "2222"}],
        "emails": [{"endereco": "ana1@email.com"}, {"endereco": "ana2@email.com"}]
    }]"""


def data_lines(csv_text):
    """Split CSV output into records, dropping the empty tail after the last CRLF."""
    lines = csv_text.split("\r\n")
    assert lines[-1] == ""
    return lines[:-1]
