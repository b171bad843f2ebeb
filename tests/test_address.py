import pytest

from tofnd.address import addr


@pytest.mark.parametrize("ip", ["0.0.0.0", "127.0.0.1"])
@pytest.mark.parametrize("port", [0, 65535])
def test_valid_ips(ip, port):
    assert addr(ip, port) == (ip, port)


@pytest.mark.parametrize("port", [0, 65535])
def test_invalid_ips(port):
    with pytest.raises(ValueError):
        addr("256.0.0.0", port)


def test_bracketed_ipv6():
    assert addr("[::1]", 80) == ("::1", 80)


def test_unbracketed_ipv6_rejected():
    with pytest.raises(ValueError):
        addr("::1", 80)


@pytest.mark.parametrize("port", [-1, 65536])
def test_out_of_range_port(port):
    with pytest.raises(ValueError):
        addr("127.0.0.1", port)