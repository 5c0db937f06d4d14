from __future__ import annotations

from typing            import Callable

from tflib.env        import environment
from tflib.protocols  import Renderable

#
# Generic
#

def merge_with(a: dict, b: dict, merge_fn: Callable = lambda x, y: y) -> dict:
    """Merges two dictionaries into a new one.

    Keys in only one of the dictionaries keep their value; keys in both
    are combined with merge_fn(a_value, b_value).

    """
    merged = {k: a.get(k, b.get(k)) for k in a.keys() ^ b.keys()}
    merged.update({k: merge_fn(a[k], b[k]) for k in a.keys() & b.keys()})
    return merged


#
# Environment
#

def show(x, *, print_it=True, indent=0, render=True):
    "Shows nested objects in the REPL in a more presentable fashion."
    if render and isinstance(x, Renderable):
        out = x.__tflib_repr__()
    elif isinstance(x, list):
        ind0 = (" " * indent)
        ind = ind0 + "  "
        sep = "\n" + ind
        init = "[\n" + ind
        final = "\n" + ind0 + "]"
        out = init + sep.join([show(xi, print_it=False, indent=indent + 2, render=False)
                               for xi in x]) + final
    elif isinstance(x, dict):
        out = str({k: show(v, print_it=False) for k, v in x.items()})
    else:
        ind0 = (" " * indent)
        out = ind0 + str(x)
    if print_it:
        environment.console.print(out)
        return
    return out
