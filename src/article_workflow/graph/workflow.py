"""LangGraph assembly of the article step sequence."""

from langgraph.graph import END, StateGraph

from article_workflow.graph.deps import WorkflowDeps
from article_workflow.graph.nodes import extract, gather, persist, split, write
from article_workflow.graph.state import ArticleState


def build_graph(deps: WorkflowDeps):
    async def _gather(state: ArticleState) -> ArticleState:
        return await gather.run(state, deps)

    async def _extract(state: ArticleState) -> ArticleState:
        return await extract.run(state, deps)

    async def _write(state: ArticleState) -> ArticleState:
        return await write.run(state, deps)

    async def _split(state: ArticleState) -> ArticleState:
        return await split.run(state, deps)

    async def _persist(state: ArticleState) -> ArticleState:
        return await persist.run(state, deps)

    graph = StateGraph(ArticleState)

    graph.add_node("gather", _gather)
    graph.add_node("extract", _extract)
    graph.add_node("write", _write)
    graph.add_node("split", _split)
    graph.add_node("persist", _persist)

    graph.set_entry_point("gather")
    graph.add_edge("gather", "extract")
    graph.add_edge("extract", "write")
    graph.add_edge("write", "split")
    graph.add_edge("split", "persist")
    graph.add_edge("persist", END)

    return graph.compile()
