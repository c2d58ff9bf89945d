"""Prompt strategies for the review endpoints.

Both endpoints run the same pipeline; they differ only in the system persona,
how the user message is laid out, and whether a job description is needed.
"""

from dataclasses import dataclass

ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert career advisor and resume optimization specialist. "
    "Your job is to analyze a resume against a specific job description and "
    "provide actionable, constructive feedback.\n\n"
    "Analyze the resume and job description to provide:\n\n"
    "1. **Skills Gap Analysis**: What skills are missing or need improvement\n"
    "2. **Experience Alignment**: How to better highlight relevant experience\n"
    "3. **Keyword Optimization**: Important keywords from the job description to include\n"
    "4. **Content Suggestions**: Specific improvements for sections like summary, experience, projects\n"
    "5. **Skill Development**: Recommendations for courses, certifications, or projects to pursue\n\n"
    "Format your response in clean markdown with:\n"
    "- **Bold** for section headers\n"
    "- *Italics* for emphasis\n"
    "- Bullet points for lists\n"
    "- Clear, actionable advice\n\n"
    "Keep suggestions practical, specific, and achievable. Focus on improvements "
    "that will make the biggest impact for this specific role."
)

ANALYSIS_USER_TEMPLATE = (
    "Please analyze this resume against the job description and provide "
    "improvement suggestions:\n\n"
    "**Job Description:**\n"
    "{job_description}\n\n"
    "**Resume Content:**\n"
    "{resume_text}"
)

ROAST_SYSTEM_PROMPT = (
    "You are a savage roaster who speaks in simple, funny English. Your job is to "
    "absolutely DESTROY this resume with humor. Be brutally funny but not "
    "mean-spirited. Use simple words, make jokes about their skills, experience, "
    "and achievements. Be creative with comparisons and metaphors. Keep it "
    "conversational and hilarious. Format your response in clean markdown with "
    "**bold** for emphasis, *italics* for sarcasm, and proper paragraphs. At the "
    "very end, ALWAYS add a Hindi paragraph that's super funny and creative. Use "
    "different Hindi roasts each time like: 'अरे भाई, तेरा resume देखकर तो लगता है...', "
    "'यार ये क्या बवाल है...', 'अबे ओ, इतना confidence कहाँ से आता है...', "
    "'भईया जी, आपका तो...', 'अरे यार, तुझे लगता है कि...', 'बंदे, तेरी तो...', "
    "'अजी सुनिए, आपका ये...', 'अरे वाह भाई, तुमने तो...'. Be super creative with "
    "Hindi slang, make it hilarious and different every time. Keep response under "
    "500 words for faster generation."
)

ROAST_USER_TEMPLATE = "Here is the resume, roast this: {resume_text}"


@dataclass(frozen=True)
class PromptStrategy:
    """How one endpoint phrases its request to the model."""

    name: str
    app_title: str
    system_prompt: str
    user_template: str
    requires_job_description: bool

    def build_messages(self, resume_text: str, job_description: str = "") -> list[dict[str, str]]:
        user_content = self.user_template.format(
            job_description=job_description,
            resume_text=resume_text,
        )
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": user_content},
        ]


@dataclass(frozen=True)
class AnalysisPrompt(PromptStrategy):
    name: str = "analysis"
    app_title: str = "Resume Optimizer"
    system_prompt: str = ANALYSIS_SYSTEM_PROMPT
    user_template: str = ANALYSIS_USER_TEMPLATE
    requires_job_description: bool = True


@dataclass(frozen=True)
class RoastPrompt(PromptStrategy):
    name: str = "roast"
    app_title: str = "Roast My Resume"
    system_prompt: str = ROAST_SYSTEM_PROMPT
    user_template: str = ROAST_USER_TEMPLATE
    requires_job_description: bool = False


ANALYSIS_PROMPT = AnalysisPrompt()
ROAST_PROMPT = RoastPrompt()
