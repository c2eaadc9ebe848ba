# src/atomchain/display.py
"""Structural views of a chain for logs and debugging sessions."""

from rich.markup import escape
from rich.tree import Tree

from atomchain.models import Chain


def format_chain(chain: Chain) -> str:
    """One-line layout of a chain, e.g. ``[text#k3f9: a1, a2] [image#x0p2: i1]``."""
    if not chain.bands:
        return "<empty chain>"
    return " ".join(
        f"[{band.type}#{band.id}: {', '.join(str(atom.id) for atom in band.atoms)}]"
        for band in chain.bands
    )


def chain_tree(chain: Chain, title: str = "chain") -> Tree:
    """Build a rich tree with one branch per band and one leaf per atom.

    Example:
        from rich.console import Console

        Console().print(chain_tree(chain))
    """
    tree = Tree(f"[bold]{escape(title)}[/bold] ({len(chain.bands)} bands, {chain.atom_count()} atoms)")
    for band in chain.bands:
        label = f"[cyan]{escape(band.type)}[/cyan] #{escape(band.id)}"
        if band.styles:
            styles = ", ".join(f"{key}={value}" for key, value in sorted(band.styles.items()))
            label += f" [dim]{{{escape(styles)}}}[/dim]"
        branch = tree.add(label)
        for atom in band.atoms:
            branch.add(escape(str(atom.id)))
    return tree
