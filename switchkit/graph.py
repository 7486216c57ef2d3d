import html

from typing import Any

from . import cli, cmds, const, vt100
from .processor import Processor


def view(p: Processor, name: str = const.ARGV0) -> Any:
    """
    Builds a graph of the dispatch table: prefixes point to the switches they
    can introduce, parsed switches carry their value and invalid arguments
    point to the invalid sink.
    """
    from graphviz import Digraph  # type: ignore

    g = Digraph(name, filename="switches.gv")

    g.attr("graph", rankdir="LR", ranksep="1.5")
    g.attr("node", shape="ellipse")
    g.attr(
        "graph",
        label=f"<<B>Dispatch Table</B><BR/>{'case-insensitive' if p.ignoreCase else 'case-sensitive'}>",
        labelloc="t",
    )

    switches = p.switches

    for idx, pattern in enumerate(p.prefixPatterns):
        g.node(f"prefix{idx}", f"<<B>{html.escape(pattern)}</B>>", shape="box")

    for hdx, handler in enumerate(p.handlers.values()):
        label = f"<B>{html.escape(handler.name)}</B>"
        if handler.expectsValue:
            label += "<BR/><I>expects value</I>"

        if handler.name in switches:
            value = switches[handler.name]
            label += f"<BR/>{vt100.wordwrap(html.escape(str(value)), 40, newline='<BR/>')}"
            g.node(f"switch{hdx}", f"<{label}>", shape="plaintext", style="filled", fillcolor="lightblue")
        else:
            g.node(f"switch{hdx}", f"<{label}>", shape="plaintext", style="filled", fillcolor="lightgrey")

        for idx in range(len(p.prefixPatterns)):
            g.edge(f"prefix{idx}", f"switch{hdx}", arrowhead="none")

    if p.invalidArgs:
        g.node(const.INVALID_SWITCH, f"<<B>{const.INVALID_SWITCH}</B>>", shape="box", color="red")
        for idx, token in enumerate(p.invalidArgs):
            g.node(f"invalid{idx}", f"<{html.escape(token)}>", shape="plaintext", fontcolor="#999999")
            g.edge(f"invalid{idx}", const.INVALID_SWITCH, color="red")

    return g


@cli.command("g", "graph", "Show the dispatch table as a graph")
def graphCmd(opts: cli.Options):
    p = cmds.build(opts)
    p.process(opts.operands)
    g = view(p)

    if opts.view:
        g.view(filename=opts.output or "switches.gv")
    elif opts.output:
        g.render(filename=opts.output)
    else:
        print(g.source)
