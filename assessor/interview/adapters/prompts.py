from langchain_core.prompts import ChatPromptTemplate

TECHNICAL_SCORING_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            """You are an expert technical interviewer providing DETAILED, SPECIFIC feedback on candidate responses.

Your feedback MUST be 4-5 sentences and include:
1. Acknowledge what they did well (1 sentence)
2. For EACH missed keyword: explain what it is and why it matters in this context (1-2 sentences)
3. Address soft skills: praise positives, provide coaching for negatives (1 sentence)
4. Give ONE specific, actionable improvement tip (1 sentence)

SCORING GUIDELINES:
- Score 1: No answer, "I don't know", or completely wrong answer with no keywords
- Score 2: Attempted but missed most key concepts, vague or confused response
- Score 3: Basic understanding, hit some keywords, but gaps in explanation
- Score 4: Good answer, hit most keywords, clear communication
- Score 5: Excellent, comprehensive, hit all/most keywords with confident delivery""",
        ),
        (
            "human",
            """Evaluate this TECHNICAL interview response:

QUESTION: {question}
{model_answer_section}

KEYWORD ANALYSIS:
- Keywords HIT ({keywords_hit} of {total_keywords}): {keywords_list}
- Keywords MISSED: {keywords_missed}

SOFT SKILLS OBSERVED:
- Clearly Spoken: {clearly_spoken}
- Eye Contact: {eye_contact}
- Confidence: {confidence}
- Structured Thinking: {structured_thinking}

INTERVIEWER NOTES: {notes}

SCORE: [1-5]
FEEDBACK: [your detailed feedback]""",
        ),
    ]
)

STARTER_SCORING_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            """You are evaluating a candidate's response to an introductory/behavioral interview question.

These questions ("tell me about yourself", "describe a project") don't have technical keywords.
Instead, evaluate based on the GUIDELINES provided and soft skills demonstrated.

SCORING CRITERIA:
- Score 5 (Excellent): Hit all guidelines, confident, engaging, well-structured, memorable
- Score 4 (Good): Hit most guidelines, clear communication, good flow, professional
- Score 3 (Average): Hit some guidelines, adequate but could be more detailed/engaging
- Score 2 (Below Average): Missed key guidelines, unclear, too brief, or unfocused
- Score 1 (Poor): Minimal effort, didn't address the question, no structure

Your feedback should be 4-5 sentences:
1. What they did well
2. Which guidelines they missed and how to address them
3. Soft skills observations
4. One specific tip for improvement""",
        ),
        (
            "human",
            """Evaluate this STARTER/BEHAVIORAL interview response:

QUESTION TYPE: {question_type}
QUESTION: {question}

EXPECTED GUIDELINES:
{guidelines}

SOFT SKILLS OBSERVED:
- Clearly Spoken: {clearly_spoken}
- Eye Contact: {eye_contact}
- Confidence: {confidence}
- Structured Thinking: {structured_thinking}

INTERVIEWER NOTES: {notes}

SCORE: [1-5]
FEEDBACK: [your detailed feedback]""",
        ),
    ]
)

SUMMARY_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            """You are an expert technical interviewer creating a high-level summary of a candidate's performance.

Synthesize the question-by-question data into two professional summaries.

OUTPUT FORMAT (JSON):
{{
  "technicalFeedback": "...",
  "softSkillFeedback": "..."
}}

1. TECHNICAL FEEDBACK (3-4 paragraphs): identify THEMES rather than listing
   every missed keyword, group missed concepts into "Areas for Review" and
   give 2-3 specific action items. Constructive, coaching-oriented tone.

2. SOFT SKILLS FEEDBACK (2-3 paragraphs): a narrative across all questions
   covering confidence, structure and clarity, noting any patterns.

Ensure the output is valid JSON.""",
        ),
        ("human", "Generate an interview summary for this session:\n\n{session_data}\n"),
    ]
)
