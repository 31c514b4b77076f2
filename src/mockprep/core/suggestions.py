from __future__ import annotations

from mockprep.core.classifier import classify_role
from mockprep.types import ImprovementSuggestion, RoleCategory

MAX_SUGGESTIONS = 8

TECHNICAL_SUGGESTIONS: tuple[ImprovementSuggestion, ...] = (
    ImprovementSuggestion(
        title="Highlight Technical Skills and Technologies",
        description=(
            "Ensure your resume prominently features programming languages, frameworks, and tools "
            "relevant to the role. Include specific versions and proficiency levels."
        ),
        priority=1,
        implementation_tips=[
            'Create a dedicated "Technical Skills" section near the top of your resume',
            "List technologies in order of proficiency and relevance to the target role",
            "Include both frontend and backend technologies if applying for full-stack positions",
            "Mention cloud platforms (AWS, Azure, GCP) and DevOps tools if applicable",
        ],
    ),
    ImprovementSuggestion(
        title="Quantify Your Technical Achievements",
        description=(
            "Add measurable outcomes to your project descriptions, such as performance improvements, "
            "user growth, or system reliability metrics."
        ),
        priority=1,
        implementation_tips=[
            'Use metrics like "Improved API response time by 40%"',
            'Include scale indicators: "Built system handling 1M+ daily requests"',
            'Mention code quality improvements: "Reduced bug rate by 30%"',
            'Highlight team impact: "Mentored 3 junior developers"',
        ],
    ),
    ImprovementSuggestion(
        title="Showcase System Design Experience",
        description="Demonstrate your ability to architect scalable systems and make technical trade-off decisions.",
        priority=2,
        implementation_tips=[
            "Describe architecture decisions you made and why",
            "Mention scalability challenges you solved",
            "Include experience with microservices, databases, or distributed systems",
            "Reference design patterns and best practices you follow",
        ],
    ),
)

MANAGERIAL_SUGGESTIONS: tuple[ImprovementSuggestion, ...] = (
    ImprovementSuggestion(
        title="Emphasize Product Strategy and Vision",
        description=(
            "Highlight your experience defining product roadmaps, conducting market research, and "
            "aligning product strategy with business goals."
        ),
        priority=1,
        implementation_tips=[
            "Describe products you launched from concept to market",
            "Include market research and competitive analysis experience",
            "Mention stakeholder management and cross-functional collaboration",
            "Highlight strategic decisions that drove business outcomes",
        ],
    ),
    ImprovementSuggestion(
        title="Demonstrate Data-Driven Decision Making",
        description=(
            "Show how you use analytics, A/B testing, and user feedback to inform product decisions "
            "and measure success."
        ),
        priority=1,
        implementation_tips=[
            "Include specific metrics you tracked and improved",
            "Mention A/B tests you designed and their outcomes",
            "Reference analytics tools you use (Google Analytics, Mixpanel, etc.)",
            "Show how data influenced your product decisions",
        ],
    ),
    ImprovementSuggestion(
        title="Highlight Leadership and Communication Skills",
        description=(
            "Showcase your ability to lead teams, influence stakeholders, and communicate product "
            "vision effectively."
        ),
        priority=2,
        implementation_tips=[
            "Describe teams you led or collaborated with",
            "Mention presentations to executives or stakeholders",
            "Include examples of resolving conflicts or aligning teams",
            "Highlight your role in agile ceremonies and sprint planning",
        ],
    ),
)

DATA_SUGGESTIONS: tuple[ImprovementSuggestion, ...] = (
    ImprovementSuggestion(
        title="Showcase Statistical and ML Expertise",
        description=(
            "Highlight your proficiency in statistical analysis, machine learning algorithms, and "
            "data modeling techniques."
        ),
        priority=1,
        implementation_tips=[
            "List ML frameworks (TensorFlow, PyTorch, scikit-learn)",
            "Mention specific algorithms you've implemented",
            "Include statistical methods and hypothesis testing experience",
            "Reference model performance metrics and improvements",
        ],
    ),
    ImprovementSuggestion(
        title="Demonstrate Business Impact of Your Analysis",
        description="Show how your data insights led to actionable business decisions and measurable outcomes.",
        priority=1,
        implementation_tips=[
            'Quantify business impact: "Analysis led to 15% revenue increase"',
            "Describe insights that changed business strategy",
            "Mention cost savings or efficiency improvements from your work",
            "Include examples of predictive models in production",
        ],
    ),
    ImprovementSuggestion(
        title="Highlight Data Engineering and Pipeline Skills",
        description=(
            "Demonstrate your ability to work with large datasets, build data pipelines, and ensure "
            "data quality."
        ),
        priority=2,
        implementation_tips=[
            "Mention experience with SQL, Python, R, and data tools",
            "Include ETL pipeline development experience",
            "Reference big data technologies (Spark, Hadoop, etc.)",
            "Describe data quality and validation processes you implemented",
        ],
    ),
)

COMMON_SUGGESTIONS: tuple[ImprovementSuggestion, ...] = (
    ImprovementSuggestion(
        title="Use Strong Action Verbs",
        description="Begin each bullet point with powerful action verbs that demonstrate your impact and initiative.",
        priority=2,
        implementation_tips=[
            'Replace weak verbs: "Responsible for" -> "Led", "Managed", "Drove"',
            'Use achievement-focused verbs: "Achieved", "Delivered", "Optimized"',
            "Vary your verb choices to avoid repetition",
            "Match verb tense: past tense for previous roles, present for current",
        ],
    ),
    ImprovementSuggestion(
        title="Tailor Content to Job Description",
        description="Align your resume content with the specific requirements and keywords from the target job posting.",
        priority=1,
        implementation_tips=[
            "Mirror keywords from the job description naturally",
            "Prioritize relevant experience over less relevant roles",
            "Adjust your summary to match the role requirements",
            "Highlight transferable skills that match the position",
        ],
    ),
    ImprovementSuggestion(
        title="Improve Resume Formatting and Readability",
        description="Ensure your resume is well-organized, easy to scan, and professionally formatted.",
        priority=3,
        implementation_tips=[
            "Use consistent formatting for dates, locations, and titles",
            "Keep bullet points concise (1-2 lines each)",
            "Use white space effectively to improve readability",
            "Ensure font sizes and styles are professional and consistent",
        ],
    ),
    ImprovementSuggestion(
        title="Add Relevant Certifications and Education",
        description=(
            "Include certifications, courses, and educational achievements that strengthen your "
            "candidacy for this role."
        ),
        priority=3,
        implementation_tips=[
            "List relevant certifications prominently",
            "Include online courses from reputable platforms",
            "Mention relevant academic projects or research",
            "Add professional development and continuous learning activities",
        ],
    ),
)

ROLE_SUGGESTIONS: dict[RoleCategory, tuple[ImprovementSuggestion, ...]] = {
    RoleCategory.TECHNICAL: TECHNICAL_SUGGESTIONS,
    RoleCategory.MANAGERIAL: MANAGERIAL_SUGGESTIONS,
    RoleCategory.DATA: DATA_SUGGESTIONS,
    RoleCategory.DESIGN: (),
    RoleCategory.GENERAL: (),
}


def generate_improvement_suggestions(
    target_role: str,
    quality_score: int | None = None,
) -> list[ImprovementSuggestion]:
    # quality_score is accepted for callers that frame priorities by it; it never changes the set.
    category = classify_role(target_role)
    suggestions = [*ROLE_SUGGESTIONS[category], *COMMON_SUGGESTIONS]
    return suggestions[:MAX_SUGGESTIONS]
