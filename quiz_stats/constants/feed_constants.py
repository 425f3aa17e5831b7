"""Column names of the response sheets exported for each question."""

TIMESTAMP_COLUMN: str = "時間戳記"
PARTICIPANT_ID_COLUMN: str = "您的員工編號"
ANSWER_COLUMN: str = "本題答案"
