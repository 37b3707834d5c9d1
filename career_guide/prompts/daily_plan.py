"""
Daily learning plan prompt template.
The plan always adds up to a fixed number of minutes.
"""

DAILY_PLAN_PROMPT = """Generate a personalized daily learning plan for someone pursuing {career_goal}.
Their current skill level: {skill_level}
Topics they've already completed: {completed_topics}

IMPORTANT: The total estimated time for ALL tasks combined MUST equal exactly {total_minutes} minutes.
Respond in {language_name}. Keep the JSON keys in English.
Use examples and resources that make sense for Ethiopian learners.

**Return ONLY valid JSON with this structure:**
{{
  "tasks": [
    {{
      "id": "task_1",
      "title": "Task title",
      "description": "Brief description",
      "estimatedTime": 15,
      "type": "learn|practice|review",
      "priority": "high|medium|low",
      "resources": ["resource link or name"],
      "completed": false
    }}
  ],
  "quizQuestions": [
    {{
      "id": "q_1",
      "question": "Question text?",
      "type": "multiple_choice",
      "options": ["A", "B", "C", "D"],
      "correctAnswer": "A",
      "explanation": "Why this is correct"
    }}
  ]
}}

Generate 4-6 tasks that add up to EXACTLY {total_minutes} minutes total. Include 3-5 quiz questions.
"""
