import pytest

from ecelgamal.main import main


def test_curves(capsys):
    assert main(["curves"]) == 0
    out = capsys.readouterr().out
    assert "P-224: point arithmetic only" in out
    assert "P-256: encrypt/decrypt" in out


def test_keygen_encrypt_decrypt(tmp_path, capsys):
    prefix = tmp_path / "alice"
    assert main(["keygen", "--curve", "P-192", "--out", str(prefix)]) == 0
    assert (tmp_path / "alice.pub").exists()
    assert (tmp_path / "alice.pri").exists()

    message = b"file contents\x00\xff" * 10
    (tmp_path / "plain").write_bytes(message)
    assert main(["encrypt", "-k", str(prefix) + ".pub", "-i", str(tmp_path / "plain"),
                 "-o", str(tmp_path / "cipher")]) == 0
    assert main(["-t", "decrypt", "-k", str(prefix) + ".pri", "-i", str(tmp_path / "cipher"),
                 "-o", str(tmp_path / "out")]) == 0
    assert (tmp_path / "out").read_bytes() == message
    assert "decrypt took" in capsys.readouterr().out


def test_keygen_unsupported_curve(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["keygen", "--curve", "P-224", "--out", str(tmp_path / "k")])
    assert exc.value.code == 2


def test_decrypt_malformed(tmp_path, capsys):
    prefix = tmp_path / "bob"
    main(["keygen", "--curve", "P-192", "--out", str(prefix)])
    (tmp_path / "cipher").write_bytes(b"short")
    with pytest.raises(SystemExit) as exc:
        main(["decrypt", "-k", str(prefix) + ".pri", "-i", str(tmp_path / "cipher"),
              "-o", str(tmp_path / "out")])
    assert exc.value.code == 1
    assert "invalid length" in capsys.readouterr().err


def test_bad_key_file(tmp_path, capsys):
    (tmp_path / "bad.pub").write_text("zz\n")
    (tmp_path / "plain").write_bytes(b"x")
    with pytest.raises(SystemExit) as exc:
        main(["encrypt", "-k", str(tmp_path / "bad.pub"), "-i", str(tmp_path / "plain"),
              "-o", str(tmp_path / "cipher")])
    assert exc.value.code == 1
    assert "malformed" in capsys.readouterr().err


def test_demo(capsys):
    assert main(["-t", "demo", "--curve", "P-192", "--message", "Hello threshold"]) == 0
    out = capsys.readouterr().out
    assert "Round trip ok? True" in out
    assert "encrypt took" in out
