"""
Quiz generation and grading prompt templates.
"""

QUIZ_GENERATION_PROMPT = """Generate {count} {difficulty} quiz questions about "{topic}".
Respond in {language_name}. Keep the JSON keys in English.

**Return ONLY a valid JSON array with this structure:**
[
  {{
    "id": "q_1",
    "question": "Question text?",
    "type": "multiple_choice",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correctAnswer": "Option A",
    "explanation": "Explanation of why this is correct",
    "difficulty": "{difficulty}",
    "category": "{topic}"
  }}
]

Mix multiple choice and short answer questions. Ensure questions test understanding, not just memorization.
"""

QUIZ_GRADING_PROMPT = """Grade these quiz answers and provide feedback.
Respond in {language_name}. Keep the JSON keys in English.

Questions and Answers:
{questions_with_answers}

**Return ONLY valid JSON with this structure:**
{{
  "score": <number of correct answers>,
  "totalQuestions": {total_questions},
  "percentage": <number>,
  "feedback": [
    {{
      "questionId": "q_1",
      "isCorrect": true,
      "feedback": "Specific feedback for this answer"
    }}
  ],
  "overallFeedback": "Encouraging overall assessment",
  "areasToImprove": ["area1", "area2"],
  "strengths": ["strength1"]
}}
"""
