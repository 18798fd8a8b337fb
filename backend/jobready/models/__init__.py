from jobready.models.user import User
from jobready.models.job import Job, JobApplication, SavedJob
from jobready.models.cv import CV, CVEducation, CVExperience, CVSkill, CVLanguage, CVReference
from jobready.models.training import TrainingCourse, TrainingModule, UserTraining, UserModuleProgress

__all__ = [
    "User",
    "Job",
    "JobApplication",
    "SavedJob",
    "CV",
    "CVEducation",
    "CVExperience",
    "CVSkill",
    "CVLanguage",
    "CVReference",
    "TrainingCourse",
    "TrainingModule",
    "UserTraining",
    "UserModuleProgress",
]
