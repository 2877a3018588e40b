"""按意图生成回复文本的模板模块。

回复完全由字符串拼接得到：相同的意图、检索计划、职位列表与上下文
总是生成相同的回复。
"""

from typing import Callable, Dict, List, Mapping, Optional

from job_assistant.dialogue.query import QueryPlan
from job_assistant.domain.models import HAS_SEARCHED_JOBS, Intent, JobSummary, Reply

FALLBACK_JOB_LIMIT = 3

GREETING_SUGGESTIONS = [
    "Show me available jobs",
    "Search for developer jobs",
    "How do I apply?",
    "Update my profile",
]
NOT_FOUND_SUGGESTIONS = ["Show all jobs", "Search by location", "Browse by category"]

APPLY_TEXT = (
    "To apply for a job:\n\n"
    "1️⃣ Find a job you're interested in\n"
    "2️⃣ Click on the job to view full details\n"
    "3️⃣ Review requirements and description carefully\n"
    "4️⃣ Click the 'Apply' button\n"
    "5️⃣ Your application will be sent to the recruiter\n\n"
    "💡 **Tips:**\n"
    "• Make sure your profile is complete\n"
    "• Upload an updated resume\n"
    "• Add relevant skills to your profile\n"
    "• Customize your application for each job"
)

PROFILE_TEXT = (
    "Here's how to manage your profile:\n\n"
    "**Update Profile:**\n"
    "1. Click your avatar in the top right\n"
    "2. Select 'View Profile'\n"
    "3. Click 'Update Profile'\n"
    "4. Add your bio, skills, and resume\n"
    "5. Save changes\n\n"
    "**Resume Tips:**\n"
    "• Keep it updated with latest experience\n"
    "• Highlight relevant skills\n"
    "• Use clear formatting\n"
    "• Include contact information\n\n"
    "A complete profile increases your chances of getting hired! 📈"
)

SKILLS_TEXT = (
    "Job requirements vary by position. To find jobs matching your skills:\n\n"
    "• Search for specific technologies (e.g., 'React jobs')\n"
    "• Browse jobs and check requirements\n"
    "• Update your profile with your skills\n"
    "• I can help you find jobs based on your expertise\n\n"
    "What skills or technologies are you looking for?"
)

HELP_TEXT = (
    "I'm here to help! 🤖 Here's what I can do:\n\n"
    "**🔍 Job Search:**\n"
    "• Find jobs by role, skills, or location\n"
    "• Search by salary range\n"
    "• Show recent job openings\n\n"
    "**📝 Applications:**\n"
    "• Guide you through the application process\n"
    "• Help with profile setup\n"
    "• Resume tips\n\n"
    "**💡 Quick Actions:**\n"
    "• 'Show me jobs' - Browse all jobs\n"
    "• 'Jobs in [city]' - Location-based search\n"
    "• 'Jobs with salary [amount]' - Salary filter\n"
    "• 'How do I apply?' - Application guide\n\n"
    "Just ask me anything!"
)

FALLBACK_NO_MATCH_TEXT = (
    "I'm not sure I understand that question completely. 🤔\n\n"
    "I can help you with:\n"
    "• Finding jobs (try: 'Show me jobs' or 'Search for developer jobs')\n"
    "• Application process\n"
    "• Profile management\n"
    "• Job search by location, salary, or skills\n\n"
    "What would you like to know?"
)

FALLBACK_TEXT = (
    "I'm not sure I understand that question. 🤔\n\n"
    "Try asking me:\n"
    "• 'Show me jobs'\n"
    "• 'How do I apply?'\n"
    "• 'Jobs in [city]'\n"
    "• 'Update profile'\n\n"
    "Or just say 'help' for more options!"
)


def pluralize(count: int, word: str = "job") -> str:
    return word if count == 1 else f"{word}s"


class ResponseComposer:
    def __init__(self, currency_symbol: str = "₹"):
        self._currency = currency_symbol
        self._templates: Dict[str, Callable[[QueryPlan, List[JobSummary], Mapping], Reply]] = {
            "greeting": self._greeting,
            "job_search": self._job_search,
            "location_query": self._location,
            "salary_query": self._salary,
            "apply_help": lambda plan, jobs, ctx: Reply(APPLY_TEXT, ["Update my profile", "Upload resume", "Add skills"]),
            "profile_help": lambda plan, jobs, ctx: Reply(PROFILE_TEXT, ["Update profile", "Add skills", "View my applications"]),
            "skills_query": self._skills,
            "help": lambda plan, jobs, ctx: Reply(HELP_TEXT, ["Show me jobs", "How do I apply?", "Update profile"]),
            "thanks": lambda plan, jobs, ctx: Reply(
                "You're welcome! 😊 If you need any more help finding jobs or have questions about the "
                "application process, just ask. Good luck with your job search! 🚀"
            ),
            "goodbye": lambda plan, jobs, ctx: Reply(
                "Goodbye! 👋 Best of luck with your job search. "
                "Come back anytime if you need help finding the perfect job!"
            ),
            "fallback": self._fallback,
        }

    def compose(
        self,
        intent: Intent,
        plan: QueryPlan,
        jobs: List[JobSummary],
        context: Optional[Mapping] = None,
    ) -> Reply:
        template = self._templates.get(intent, self._fallback)
        return template(plan, list(jobs), context or {})

    def money(self, amount: int) -> str:
        return f"{self._currency}{amount:,}"

    def _greeting(self, plan: QueryPlan, jobs: List[JobSummary], context: Mapping) -> Reply:
        if context.get(HAS_SEARCHED_JOBS):
            text = "Hello again! 👋 Ready to continue your job search?"
        else:
            text = (
                "Hello! 👋 I'm your intelligent Job Portal assistant. I can help you find jobs, "
                "answer questions, and guide you through the application process. What would you like to know?"
            )
        return Reply(text, list(GREETING_SUGGESTIONS))

    def _job_search(self, plan: QueryPlan, jobs: List[JobSummary], context: Mapping) -> Reply:
        term = plan.subject
        if term:
            if not jobs:
                return Reply(
                    f'I couldn\'t find any jobs matching "{term}". Try searching with different keywords, '
                    "or ask me to show all available jobs.",
                    list(NOT_FOUND_SUGGESTIONS),
                )
            text = f'I found {len(jobs)} {pluralize(len(jobs))} matching "{term}":\n\n'
            for i, job in enumerate(jobs, 1):
                text += f"{i}. **{job.title}** at {job.company}\n"
                text += f"   Location: {job.location}\n"
                text += f"   Salary: {self.money(job.salary)}\n"
                text += f"   Experience: {job.experience_level} years\n\n"
            text += "Would you like more details about any of these positions?"
            return Reply(text, [], jobs)

        if not jobs:
            return Reply("There are no jobs available at the moment. Check back later!")
        text = f"Here are {len(jobs)} recent job openings:\n\n"
        for i, job in enumerate(jobs, 1):
            text += f"{i}. **{job.title}** at {job.company}\n"
            text += f"   Location: {job.location} | Salary: {self.money(job.salary)}\n\n"
        text += "You can ask me about any specific job or search for jobs by skills, location, or role."
        return Reply(text, [], jobs)

    def _location(self, plan: QueryPlan, jobs: List[JobSummary], context: Mapping) -> Reply:
        location = plan.subject
        if not location:
            return Reply(
                "I can help you find jobs by location. Just tell me the city or ask for remote jobs. "
                "For example: 'Show me jobs in Mumbai' or 'Find remote jobs'"
            )
        if not jobs:
            return Reply(f"No jobs found in {location}. Would you like me to search in other locations?")
        text = f"Found {len(jobs)} {pluralize(len(jobs))} in {location}:\n\n"
        for i, job in enumerate(jobs, 1):
            text += f"{i}. **{job.title}** at {job.company}\n"
            text += f"   Salary: {self.money(job.salary)}\n\n"
        return Reply(text.rstrip("\n"), [], jobs)

    def _salary(self, plan: QueryPlan, jobs: List[JobSummary], context: Mapping) -> Reply:
        if plan.min_salary is None:
            return Reply(
                "To search by salary, specify the amount. "
                "For example: 'Show jobs with salary 5 lakh' or 'Jobs paying 50k'"
            )
        floor = self.money(plan.min_salary)
        if not jobs:
            return Reply(f"No jobs found with salary ≥ {floor}. Try searching with a lower salary range.")
        text = f"Found {len(jobs)} {pluralize(len(jobs))} with salary ≥ {floor}:\n\n"
        for i, job in enumerate(jobs, 1):
            text += f"{i}. **{job.title}** - {self.money(job.salary)}\n"
        return Reply(text.rstrip("\n"), [], jobs)

    def _skills(self, plan: QueryPlan, jobs: List[JobSummary], context: Mapping) -> Reply:
        skill = plan.subject
        if not skill:
            return Reply(SKILLS_TEXT)
        if not jobs:
            return Reply(f"No jobs found requiring {skill}. Try searching for related skills or browse all jobs.")
        text = f"Found {len(jobs)} {pluralize(len(jobs))} requiring {skill}:\n\n"
        for i, job in enumerate(jobs, 1):
            text += f"{i}. **{job.title}** - {job.company}\n"
        return Reply(text.rstrip("\n"), [], jobs)

    def _fallback(self, plan: QueryPlan, jobs: List[JobSummary], context: Mapping) -> Reply:
        if plan.query is None:
            return Reply(FALLBACK_TEXT, ["Show me jobs", "Help", "How do I apply?"])
        if not jobs:
            return Reply(FALLBACK_NO_MATCH_TEXT, ["Show me jobs", "How do I apply?", "Help"])
        shown = jobs[:FALLBACK_JOB_LIMIT]
        text = f"I found {len(jobs)} {pluralize(len(jobs))} that might interest you:\n\n"
        for i, job in enumerate(shown, 1):
            text += f"{i}. **{job.title}** at {job.company}\n"
        text += (
            "\nWould you like more details? Or try asking me something like:\n"
            "• 'Show me all jobs'\n"
            "• 'Jobs in [location]'\n"
            "• 'How do I apply?'"
        )
        return Reply(text, [], shown)
