from .user import User
from .job import Job
from .experience import Experience, candidate_experiences, talent_experiences
from .candidate import Candidate
from .interview import Interview
from .status_change import StatusChange
from .notification import Notification
from .talent import Talent
# base mixins are imported by the above as needed
