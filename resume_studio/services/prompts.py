from __future__ import annotations

from resume_studio.ai.types import (
    RAW_TEXT,
    Attachment,
    GenerationRequest,
    json_shape,
)

RESUME_ANALYSIS = "resume_analysis"
JOB_MATCH = "job_match"
LINKEDIN_PROFILE = "linkedin_profile"
INTERVIEW_QUESTIONS = "interview_questions"
ANSWER_EVALUATION = "answer_evaluation"
STRUCTURED_RESUME = "structured_resume"

_JSON_ONLY = "Do NOT return markdown formatting, just pure JSON."

_STRUCTURED_RESUME_SCHEMA = (
    "{\n"
    '  "personal": {"fullName": "", "email": "", "phone": "", "linkedin": "", "github": "", "website": "", "summary": ""},\n'
    '  "experience": [{"id": 1, "role": "", "company": "", "date": "", "description": ""}],\n'
    '  "education": [{"id": 1, "degree": "", "school": "", "date": ""}],\n'
    '  "skills": ["skill1", "skill2"],\n'
    '  "projects": [{"id": 1, "title": "", "link": "", "description": ""}]\n'
    "}"
)

_RESUME_ANALYSIS_SCHEMA = (
    "{\n"
    '  "score": number (0-100),\n'
    '  "candidateName": "inferred name",\n'
    '  "summary": "2 sentence professional summary",\n'
    '  "strengths": ["skill1", "skill2"],\n'
    '  "improvements": ["Specific advice 1", "Specific advice 2"],\n'
    f'  "rebuiltResume": {_STRUCTURED_RESUME_SCHEMA}\n'
    "}"
)


def truncate(text: str | None, limit: int) -> str:
    value = (text or "").strip()
    return value[:limit]


def build_resume_analysis_request(resume_text: str) -> GenerationRequest:
    prompt = (
        "You are an expert ATS (Applicant Tracking System) and Technical Recruiter.\n"
        "Analyze the following resume text, score it and rebuild it into a clean structure.\n"
        f"{_JSON_ONLY}\n\n"
        f'Resume Text:\n"{truncate(resume_text, 10000)}"\n\n'
        f"Return the response in this exact JSON structure:\n{_RESUME_ANALYSIS_SCHEMA}"
    )
    return GenerationRequest(prompt=prompt, expects=json_shape(RESUME_ANALYSIS), task="resume_analysis")


def build_resume_file_analysis_request(attachment: Attachment) -> GenerationRequest:
    prompt = (
        "You are an expert ATS. Analyze this resume document (which may be an image or a scanned PDF).\n"
        "Extract its details, score it and rebuild it into a clean structure.\n"
        f"{_JSON_ONLY}\n\n"
        f"Return the response in this exact JSON structure:\n{_RESUME_ANALYSIS_SCHEMA}"
    )
    return GenerationRequest(
        prompt=prompt,
        attachment=attachment,
        expects=json_shape(RESUME_ANALYSIS),
        task="resume_file_analysis",
    )


def build_job_match_request(resume_text: str, job_description: str) -> GenerationRequest:
    prompt = (
        "You are an expert Technical Recruiter and Hiring Manager.\n"
        "Compare the following Resume against the Job Description (JD).\n\n"
        f'RESUME:\n"{truncate(resume_text, 5000)}"\n\n'
        f'JOB DESCRIPTION:\n"{truncate(job_description, 5000)}"\n\n'
        "Provide a JSON response with this matching analysis:\n"
        "{\n"
        '  "matchPercentage": number (0-100),\n'
        '  "matchStatus": "High" | "Medium" | "Low",\n'
        '  "missingSkills": ["skill1", "skill2"],\n'
        '  "matchingSkills": ["skill1", "skill2"],\n'
        '  "cultureFitScore": number (0-10),\n'
        '  "advice": "Detailed advice on how to convert this application into an interview."\n'
        "}\n"
        "Do NOT return markdown. Just clean JSON."
    )
    return GenerationRequest(prompt=prompt, expects=json_shape(JOB_MATCH), task="job_match")


def build_cover_letter_request(resume_text: str, job_description: str) -> GenerationRequest:
    prompt = (
        "You are an expert Career Coach. Write a professional Cover Letter.\n"
        f'RESUME: "{truncate(resume_text, 3000)}"\n'
        f'JOB DESCRIPTION: "{truncate(job_description, 3000)}"\n'
        "Return ONLY the body of the letter."
    )
    return GenerationRequest(prompt=prompt, expects=RAW_TEXT, task="cover_letter")


def build_linkedin_request(resume_text: str) -> GenerationRequest:
    prompt = (
        "You are a LinkedIn Branding Expert. Generate LinkedIn content for this candidate.\n"
        f'RESUME: "{truncate(resume_text, 5000)}"\n'
        'Return JSON: { "headline": "", "about": "", "experience": [{"company": "", "bulletPoints": ""}], "skills": [] }\n'
        "Return ONLY clean JSON."
    )
    return GenerationRequest(prompt=prompt, expects=json_shape(LINKEDIN_PROFILE), task="linkedin")


def build_interview_questions_request(job_description: str, resume_text: str | None = None) -> GenerationRequest:
    resume_block = ""
    if resume_text and resume_text.strip():
        resume_block = f'CANDIDATE RESUME: "{truncate(resume_text, 3000)}"\n'
    prompt = (
        "You are a senior interviewer preparing a mock interview.\n"
        f'JOB DESCRIPTION: "{truncate(job_description, 5000)}"\n'
        f"{resume_block}"
        "Write 5 interview questions mixing technical and behavioral topics for this role.\n"
        'Return JSON: { "questions": ["question 1", "question 2"] }\n'
        "Return ONLY clean JSON."
    )
    return GenerationRequest(prompt=prompt, expects=json_shape(INTERVIEW_QUESTIONS), task="interview_questions")


def build_answer_evaluation_request(
    question: str, answer: str, job_description: str | None = None
) -> GenerationRequest:
    context = ""
    if job_description and job_description.strip():
        context = f'JOB DESCRIPTION: "{truncate(job_description, 3000)}"\n'
    prompt = (
        "You are an interview coach evaluating a candidate's answer.\n"
        f"{context}"
        f'QUESTION: "{truncate(question, 2000)}"\n'
        f'ANSWER: "{truncate(answer, 4000)}"\n'
        'Return JSON: { "score": number (0-10), "feedback": "", "improvedAnswer": "" }\n'
        "Return ONLY clean JSON."
    )
    return GenerationRequest(prompt=prompt, expects=json_shape(ANSWER_EVALUATION), task="answer_evaluation")


def build_structured_resume_request(raw_text: str) -> GenerationRequest:
    prompt = (
        "You are a resume writer. Convert the following free text into a structured resume.\n"
        "Use only facts present in the text; leave unknown fields as empty strings.\n"
        f'TEXT: "{truncate(raw_text, 8000)}"\n\n'
        f"Return JSON in this exact structure:\n{_STRUCTURED_RESUME_SCHEMA}\n"
        "Return ONLY clean JSON."
    )
    return GenerationRequest(prompt=prompt, expects=json_shape(STRUCTURED_RESUME), task="autofill")
