"""Prompt assembly - inject retrieved context into model prompts."""

from contextvault.domain.entities import ContextBundle

DEFAULT_SYSTEM_PROMPT = "You are a helpful AI assistant."

_SUPPLEMENT_INSTRUCTION = (
    "If the context doesn't contain enough information to fully answer the question, "
    "you can supplement with your general knowledge, but prioritize the provided "
    "context when available."
)


class PromptAssembler:
    """Format a context bundle and a user prompt for the chat model."""

    def assemble(self, bundle: ContextBundle, user_prompt: str) -> str:
        """Context block first, then the delimited question, then the instruction.

        Without context the user prompt is returned unchanged.
        """
        if bundle.chunk_count == 0:
            return user_prompt
        return (
            "You have access to the following relevant information that may help "
            "answer the user's question:\n\n"
            f"{bundle.context_text}\n\n"
            f"User's question: {user_prompt}\n\n"
            "Please use the provided context to give a comprehensive and accurate answer. "
            f"{_SUPPLEMENT_INSTRUCTION}"
        )

    def build_system_prompt(
        self,
        bundle: ContextBundle,
        base_prompt: str | None = None,
        include_all_sources: bool = True,
    ) -> str:
        """System prompt naming the retrieval scope, or the base prompt without context."""
        base = base_prompt or DEFAULT_SYSTEM_PROMPT
        if not bundle.context_text:
            return base

        folders = bundle.selected_folders
        folder_info = (
            f" (filtered to selected folders: {', '.join(folders)})"
            if not include_all_sources and folders
            else ""
        )
        scope = "all available sources" if include_all_sources else "selected folders only"
        return (
            "You are an AI assistant that uses the following relevant context from the "
            f"user's saved content{folder_info} (scope: {scope}) to answer the user question:"
            f"\n\n{bundle.context_text}\n\n"
            f"Answer as accurately as possible based on the provided context. {_SUPPLEMENT_INSTRUCTION}"
        )
