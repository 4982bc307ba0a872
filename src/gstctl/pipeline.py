from collections.abc import Sequence

from gi.repository import Gst
from loguru import logger

from .element import Element, link_chain


def pipeline(*elements: Element, name: str | None = None) -> Element:
    """Create pipeline and add elements."""
    pipe = Element.create("pipeline", name)
    if pipe is None:
        raise RuntimeError("Failed to create pipeline")
    for e in elements:
        pipe.native.add(e.native)
        if e.native.get_parent() is not pipe.native:
            raise RuntimeError(f"Failed to add {e.name or e} to pipeline {name or '<unnamed>'}")
    return pipe


def chain(*elements: Element, name: str | None = None) -> Element:
    """Create pipeline, add elements, and link them.

    Links made before a failing pair are left in place.
    """
    pipe = pipeline(*elements, name=name)
    if not link_chain(elements):
        raise RuntimeError(f"Failed to link elements in pipeline {name or '<unnamed>'}")
    return pipe


def branch(tee: Element, *branches: Sequence[Element]) -> list[Element]:
    """
    Connect multiple branches to a tee element.
    For each branch: creates an intermediate queue, requests a tee src pad, and links.
    Returns the created queue elements so the branch can be removed with `unbranch`.
    """
    parent = tee.native.get_parent()
    if not isinstance(parent, Gst.Bin):
        raise RuntimeError("tee must be added to a bin/pipeline before branching")
    if tee.native.get_pad_template("src_%u") is None:
        raise ValueError("Provided element does not have 'src_%u' request pad template (not a tee?)")

    from .factories import queue

    created_queues: list[Element] = []
    for branch_elems in branches:
        q = queue()
        parent.add(q.native)
        if q.native.get_parent() is not parent:
            raise RuntimeError("Failed to add queue to tee's parent bin")

        tee_src = tee.request_pad("src_%u")
        if tee_src is None:
            raise RuntimeError("Failed to request pad 'src_%u' from tee")
        q_sink = q.static_pad("sink")
        if q_sink is None:
            tee.release_request_pad(tee_src)
            raise RuntimeError("Queue has no static 'sink' pad")

        ret = tee_src.link(q_sink)
        if ret != Gst.PadLinkReturn.OK:
            tee.release_request_pad(tee_src)
            raise RuntimeError(f"Failed to link {tee.name}:{tee_src.name} -> queue:sink ({ret.value_nick})")

        for e in branch_elems:
            if e.native.get_parent() is not parent:
                parent.add(e.native)
        if branch_elems and not link_chain([q, *branch_elems]):
            raise RuntimeError("Failed to link downstream branch after queue")

        # hot-branching: follow the pipeline if it is already running
        q.native.sync_state_with_parent()
        for e in branch_elems:
            e.native.sync_state_with_parent()

        logger.debug("Branched {} via {}", tee.name, tee_src.name)
        created_queues.append(q)

    return created_queues


def unbranch(tee: Element, *queues: Element) -> None:
    """
    Detach queues from tee and release the request pads `branch` created.
    """
    for q in queues:
        sink = q.static_pad("sink")
        if sink is None:
            continue
        src = sink.peer()
        if src is None:
            continue
        src.unlink(sink)
        if src.native.get_parent_element() is tee.native:
            tee.release_request_pad(src)
