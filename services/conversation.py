from typing import Dict, List, Optional


def normalize_question(question: str) -> str:
    return question.strip().lower()


class ConversationLog:
    """Question/answer pairs answered by /suggest, kept for the process lifetime."""

    def __init__(self):
        self._entries: List[Dict[str, str]] = []

    def find(self, question: str) -> Optional[str]:
        key = normalize_question(question)
        for entry in self._entries:
            if entry["question"] == key:
                return entry["answer"]
        return None

    def add(self, question: str, answer: str) -> Dict[str, str]:
        entry = {"question": normalize_question(question), "answer": answer}
        self._entries.append(entry)
        return entry

    def clear(self) -> None:
        self._entries = []

    def entries(self) -> List[Dict[str, str]]:
        return [dict(entry) for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
