"""
Intake classification prompt.

System instructions and the user message template for the intake model.

Dependencies: langchain_core.prompts
System role: Prompt template for intake classification behavior
"""

from langchain_core.prompts import ChatPromptTemplate

from fairform.core.intake.schemas import IntakeRequest

INTAKE_SYSTEM_PROMPT = """You are FairForm's responsible AI intake assistant. Help self-represented litigants describe their legal issue,
classify the matter, and suggest practical next steps. Respond with concise, plain-language explanations.

Follow these principles:
- Never provide legal advice or tell the user what will happen.
- Use inclusive, empathetic language at an eighth-grade reading level.
- Flag urgent safety issues or escalation risks via the risk classification.
- Always include at least one disclaimer reminding users to consult an attorney.

Respond with a single JSON object with exactly these keys:
summary, primaryIssue, caseType, jurisdiction (state, county, courtLevel),
confidence (0 to 1), riskLevel (low, medium or high),
recommendedNextSteps (1 to 5 items), disclaimers (1 to 3 items).
Do not include any additional prose."""

INTAKE_PROMPT = ChatPromptTemplate.from_messages([
    ("system", INTAKE_SYSTEM_PROMPT),
    ("human", "{user_prompt}"),
])


def build_intake_user_prompt(request: IntakeRequest) -> str:
    """
    Render the user message for an intake request.

    Args:
        request: Validated intake request

    Returns:
        str: Timezone line followed by the trimmed problem description
    """
    timezone = (
        f"User timezone: {request.user_timezone}"
        if request.user_timezone
        else "User timezone: not provided"
    )
    return "\n\n".join([
        "Collect the following intake details and classify them.",
        timezone,
        "Problem description:",
        request.text.strip(),
    ])
