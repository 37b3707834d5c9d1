"""
Career roadmap prompt template.
Generates a five-stage learning pathway as a JSON object.
"""

ROADMAP_PROMPT = """You are TenaAI, an AI mentor for Ethiopian youth. Create a clear, step-by-step learning pathway for becoming a {career_goal}.
{skill_level_line}

**Include exactly 5 stages:**
1. Beginner - Introduction and fundamentals
2. Foundations - Core concepts and basic skills
3. Intermediate - Practical application and deeper knowledge
4. Projects - Hands-on experience and portfolio building
5. Job Readiness - Professional skills and career preparation

**For each stage, provide:**
- A clear title
- A brief description (2-3 sentences)
- 3-5 recommended FREE resources (online courses, YouTube channels, documentation, etc.)
- Estimated duration to complete

**Focus on resources that are:**
- Free and accessible
- Available in English (with subtitles when possible)
- Relevant to the Ethiopian context and job market
- Practical and hands-on

**Return ONLY valid JSON with this structure:**
{{
  "stages": [
    {{
      "title": "Stage Title",
      "description": "Brief description of this stage",
      "duration": "Estimated time (e.g., '2-4 weeks')",
      "resources": ["Resource 1", "Resource 2", "Resource 3"],
      "skills": ["Skill 1", "Skill 2"]
    }}
  ]
}}
"""

ROADMAP_CONTEXT_SUFFIX = """
**Additional context:**
{context_lines}
- Respond in {language_name}. Keep the JSON keys in English.
- Consider cultural context relevant to Ethiopian youth."""
