"""
Interview Question Prompts and Templates.

Contains the system instruction and the two user prompts (subject-based and
resume-based) sent to the LLM when generating a question set.
"""
from typing import Dict, List


# Display names for the subject tags the dashboard offers
SUBJECT_NAMES: Dict[str, str] = {
    "os": "Operating Systems",
    "cn": "Computer Networks",
    "dbms": "Database Management Systems",
    "dsa": "Data Structures and Algorithms",
    "oop": "Object-Oriented Programming",
    "behavioral": "Behavioral Interview",
    "basic": "Basic Technical Interview",
    "full": "Full Technical Interview",
    "resume": "Resume-Based Interview",
}

# Resume text beyond this is cut before prompting to stay inside token limits
RESUME_EXCERPT_CHARS = 2000


INTERVIEWER_SYSTEM_PROMPT = (
    "You are an expert technical interviewer. "
    "Generate ONLY JSON output with exact number of questions requested."
)


SUBJECT_QUESTIONS_PROMPT = """Generate EXACTLY {num_questions} interview questions for subjects: {subjects}.

CRITICAL: Generate ONLY {num_questions} questions, no more, no less.

IMPORTANT: Return ONLY a valid JSON object of the form {{"questions": [...]}}. Each question object MUST have:
- id (number, starting from 1)
- question (string)
- type (one of: "technical", "behavioral", "scenario", "hr")
- category (string, e.g., "Operating Systems", "Computer Networks")
- difficulty (one of: "easy", "medium", "hard")
- timeLimit (number in seconds, between 30-120)

Example format:
{{
  "questions": [
    {{
      "id": 1,
      "question": "Explain the difference between TCP and UDP.",
      "type": "technical",
      "category": "Computer Networks",
      "difficulty": "medium",
      "timeLimit": 60
    }},
    {{
      "id": 2,
      "question": "What is a deadlock and how can it be prevented?",
      "type": "technical",
      "category": "Operating Systems",
      "difficulty": "hard",
      "timeLimit": 75
    }}
  ]
}}

Make questions practical and interview-focused. Mix different difficulty levels."""


RESUME_QUESTIONS_PROMPT = """Generate EXACTLY {num_questions} personalized interview questions based on this resume:

RESUME CONTENT:
{resume_excerpt}

CRITICAL: Generate ONLY {num_questions} questions, no more, no less.

INSTRUCTIONS:
1. Read the resume and ask specific questions about:
   - Projects mentioned
   - Work experiences
   - Technical skills listed
   - Education and certifications
   - Achievements and responsibilities

2. Question types mix:
   - Technical questions about specific skills
   - Behavioral questions about experiences
   - Project-specific questions
   - Problem-solving scenarios

3. Format requirements (JSON object only):
{{
  "questions": [
    {{
      "id": 1,
      "question": "Question text here",
      "type": "technical/behavioral/project/scenario",
      "category": "Resume-Based",
      "difficulty": "easy/medium/hard",
      "timeLimit": 45-120,
      "basedOn": "Briefly mention which part of resume this relates to"
    }}
  ]
}}

4. Make questions specific to the resume content. For example:
   - "I see you worked with [Technology]. Can you explain..."
   - "Your project [Project Name] sounds interesting. What was your role..."
   - "Tell me about your experience at [Company]..."

Generate EXACTLY {num_questions} personalized questions:"""


def subject_display_names(subject_tags: List[str]) -> List[str]:
    """Map subject tags to display names, passing unknown tags through."""
    return [SUBJECT_NAMES.get(tag, tag) for tag in subject_tags]


def build_subject_prompt(subject_tags: List[str], num_questions: int) -> str:
    subjects = ", ".join(subject_display_names(subject_tags)) or "general software engineering"
    return SUBJECT_QUESTIONS_PROMPT.format(num_questions=num_questions, subjects=subjects)


def build_resume_prompt(resume_text: str, num_questions: int) -> str:
    return RESUME_QUESTIONS_PROMPT.format(
        num_questions=num_questions,
        resume_excerpt=resume_text.strip()[:RESUME_EXCERPT_CHARS],
    )
