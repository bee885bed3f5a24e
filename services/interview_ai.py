from dataclasses import dataclass
from typing import List, Optional
import re

from openai import AsyncOpenAI

from core.config import OPENAI_API_KEY, OPENAI_MODEL
from core.logging_config import get_logger
from models.interview import GENERAL_KNOWLEDGE, question_count_for

logger = get_logger(__name__)

NOT_A_QUESTION = "NOT_A_QUESTION"

DEFAULT_SCORE = 5
DEFAULT_FEEDBACK = "Good effort!"
DEFAULT_ANSWER = "Answer unavailable."
DEFAULT_HINT = "Think about the key concepts and your practical experience."

SCORE_PATTERN = re.compile(r"SCORE:\s*(\d+)", re.IGNORECASE)
FEEDBACK_PATTERN = re.compile(r"FEEDBACK:\s*(.+)", re.IGNORECASE | re.DOTALL)


@dataclass
class Evaluation:
    score: int
    feedback: str


def parse_evaluation(text: Optional[str]) -> Evaluation:
    """
    Turn a `SCORE: <n>` / `FEEDBACK: <text>` reply into an Evaluation.

    Never raises. A missing or unreadable score becomes 5 and a missing
    feedback line becomes a generic encouragement. Scores are clamped to
    0-10.
    """
    text = text or ""
    score_match = SCORE_PATTERN.search(text)
    feedback_match = FEEDBACK_PATTERN.search(text)

    score = int(score_match.group(1)) if score_match else DEFAULT_SCORE
    score = max(0, min(10, score))

    feedback = feedback_match.group(1).strip() if feedback_match else ""
    return Evaluation(score=score, feedback=feedback or DEFAULT_FEEDBACK)


def is_not_a_question(reply: Optional[str]) -> bool:
    if not reply:
        return True
    return reply.strip().strip("\"'`").rstrip(".").upper() == NOT_A_QUESTION


def detection_prompt(transcript: str) -> str:
    return f"""Analyze this transcript and determine if it contains a technical question.

Transcript: "{transcript}"

If it contains a question:
- Reply with just the question in a clear, concise form
- Add a question mark if missing
- If multiple questions, extract the LAST one only

If it does NOT contain a question:
- Reply with exactly: "{NOT_A_QUESTION}"

Your response:"""


def answer_prompt(question: str) -> str:
    return f"""
You are Tapolio, a fast technical assistant for developers.

User transcript (may contain multiple questions spoken naturally):
"{question}"

INSTRUCTIONS:
1. First, identify if this contains multiple distinct questions
2. If multiple questions detected, answer each one separately using this format:

**Q1:** [first question restated concisely]
**A1:** [answer - 2-4 sentences]

**Q2:** [second question]
**A2:** [answer]

(continue for all questions found)

3. If only ONE question, just answer it directly in 3-6 sentences without the Q/A format.

For each answer:
- Definitions: Explain briefly with an example
- How-to: Give 3-5 key steps
- Troubleshooting: Identify causes and solutions
- Math/simple questions: Give the direct answer

Be concise, direct, and actionable. No fluff.
"""


def question_prompt(technology: str, number: int, previous: List[str]) -> str:
    total = question_count_for(technology)
    history = "; ".join(previous)

    if technology == GENERAL_KNOWLEDGE:
        prompt = f"""Generate an extremely simple general knowledge question suitable for anyone.
This is question {number} of {total}.
Make it easy, fun, and different from previous questions."""
        if previous:
            prompt += f"\nPrevious questions: {history}"
        prompt += """
Examples: "What color is grass?", "How many legs does a spider have?", "What is the capital of France?"
Just return the question, nothing else."""
        return prompt

    prompt = f"""Generate a verbal interview question about {technology}.
This is question {number} of {total} in a SPOKEN interview (not a coding test).

IMPORTANT:
- Ask about concepts, explanations, or experiences
- DO NOT ask for code examples or implementations
- Questions should be answerable in 1-2 spoken sentences
- Focus on understanding, not memorization
- Make it different from previous topics
"""
    if previous:
        prompt += f"\nPrevious questions: {history}"
    prompt += "\nJust return the question, nothing else."
    return prompt


def evaluation_prompt(technology: str, question: str, answer: str) -> str:
    if technology == GENERAL_KNOWLEDGE:
        return f"""You are evaluating a simple general knowledge question. This is meant to be easy and fun.

Question: {question}
Answer: {answer}

IMPORTANT: Be generous with scoring. Any reasonable answer should get a high score (8-10).
For example: "What color is grass?" -> "green" = 10/10

Evaluate:
1. Score 9-10 if the answer is correct
2. Score 7-8 if partially correct or close
3. Score below 7 only if completely wrong

Format your response as:
SCORE: [number]
FEEDBACK: [1-2 sentences of encouragement]"""

    return f"""You are evaluating a technical interview answer about {technology}.

Question: {question}
Candidate's Answer: {answer}

Evaluate the answer and provide:
1. A score from 0-10 (be fair but realistic)
2. Constructive feedback that includes:
   - What they got right (if anything)
   - Key points they missed or should have mentioned
   - A brief example or explanation of the correct answer to help them learn

Keep feedback to 3-4 sentences. Be educational and encouraging.

Format your response as:
SCORE: [number]
FEEDBACK: [your feedback]"""


def hint_prompt(question: str) -> str:
    return f"""You are helping someone answer this interview question: "{question}"

Give a helpful hint (1-2 sentences) that guides them toward a good answer without giving away the full response. Be encouraging and specific."""


class InterviewAI:
    """Prompts and parsing around the OpenAI chat completions API."""

    def __init__(self, client: Optional[AsyncOpenAI] = None, model: str = OPENAI_MODEL):
        self._client = client
        self.model = model

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=OPENAI_API_KEY)
        return self._client

    async def _complete(self, prompt: str, temperature: float, max_tokens: int) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens
        )
        if not response.choices:
            return ""
        content = response.choices[0].message.content
        return content.strip() if content else ""

    async def detect_question(self, transcript: str) -> Optional[str]:
        """Return the latest question in the transcript, or None if there is none."""
        reply = await self._complete(detection_prompt(transcript), temperature=0.1, max_tokens=100)
        logger.info(f"AI detection result: \"{reply}\"")
        if is_not_a_question(reply):
            return None
        return reply

    async def answer_question(self, question: str) -> str:
        reply = await self._complete(answer_prompt(question), temperature=0.3, max_tokens=250)
        return reply or DEFAULT_ANSWER

    async def generate_question(self, technology: str, number: int, previous: Optional[List[str]] = None) -> str:
        previous = previous or []
        reply = await self._complete(
            question_prompt(technology, number, previous), temperature=0.7, max_tokens=150
        )
        if reply:
            return reply
        if number == 1:
            return f"What is {technology}?"
        return f"Question {number} about {technology}"

    async def evaluate_answer(self, technology: str, question: str, answer: str) -> Evaluation:
        reply = await self._complete(
            evaluation_prompt(technology, question, answer), temperature=0.3, max_tokens=300
        )
        return parse_evaluation(reply)

    async def generate_hint(self, question: str) -> str:
        reply = await self._complete(hint_prompt(question), temperature=0.7, max_tokens=100)
        return reply or DEFAULT_HINT
