from switchkit import cli, graph
from switchkit.processor import Processor


def _noop(e):
    pass


def test_graph_dispatch_table():
    p = Processor()
    p.registerHandler("a", _noop, True)
    p.registerHandler("b", _noop)
    p.process(["-a", "v<1>"])

    src = graph.view(p).source
    assert "prefix0" in src
    assert "prefix1" in src
    assert "expects value" in src
    assert "v&lt;1&gt;" in src
    assert src.count("lightblue") == 1
    assert src.count("lightgrey") == 1
    assert "INVALID" not in src


def test_graph_invalid_arguments():
    p = Processor(prefixes=["--"])
    p.process(["--x", "--y"])

    src = graph.view(p).source
    assert "INVALID" in src
    assert "invalid0" in src
    assert "invalid1" in src
    assert "--y" in src


def test_graph_command(capsys):
    cli.exec(["graph", "-f", "a", "--", "-a"])
    out = capsys.readouterr().out
    assert out.startswith("digraph switchkit {")
    assert "lightblue" in out


def test_graph_escapes_invalid_arguments():
    p = Processor(prefixes=["<"])
    p.process(["<b>", "<x&y"])

    src = graph.view(p).source
    assert "&lt;b&gt;" in src
    assert "&lt;x&amp;y" in src
    assert "<b>" not in src.replace("<B>", "")
