"""Daily - 인터뷰 대화와 업무 일지 생성"""
from .readiness import detect_readiness
from .interview_handler import process_interview_message, generate_interview_reply, InterviewResponse
from .report_generator import extract_daily_report, generate_daily_report

__all__ = [
    "detect_readiness",
    "process_interview_message",
    "generate_interview_reply",
    "InterviewResponse",
    "extract_daily_report",
    "generate_daily_report",
]
