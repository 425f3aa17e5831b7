"""Static metadata describing Quiz Stats."""

APP_NAME = "Quiz Stats"
APP_VERSION = "0.1"
APP_ABOUT_TEXT = (
    "Quiz Stats scores quiz answers collected through hosted response sheets. "
    "Upload a question list, calculate scores for each question and follow the running leaderboard."
)
