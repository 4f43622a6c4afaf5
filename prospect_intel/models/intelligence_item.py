"""
IntelligenceItem model — one externally-sourced signal about a prospect.

Rows are inserted by the refresh pipeline after dedup and never mutated by it;
dismissal is a separate user action.
"""
from sqlalchemy import Column, Integer, Float, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func

from prospect_intel.database import Base


class IntelligenceItem(Base):
    __tablename__ = 'intelligence_items'

    id = Column(Text, primary_key=True)
    prospect_id = Column(Text, ForeignKey('prospects.id'), nullable=True, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    source_type = Column(Text, nullable=True)        # news / linkedin / job-change / funding / sports / other
    intelligence_type = Column(Text, nullable=True)  # news / company_update / job_change / funding / match_result / linkedin_post
    url = Column(Text, nullable=True)
    published_at = Column(DateTime(timezone=True), nullable=True)
    ai_tip = Column(Text, nullable=True)
    relevance_score = Column(Float, nullable=True)   # 0-100
    company_name = Column(Text, nullable=True)
    source_name = Column(Text, nullable=True)
    content_quote = Column(Text, nullable=True)
    match_home_team = Column(Text, nullable=True)
    match_away_team = Column(Text, nullable=True)
    match_home_score = Column(Integer, nullable=True)
    match_away_score = Column(Integer, nullable=True)
    match_league = Column(Text, nullable=True)
    person_name = Column(Text, nullable=True)
    person_position = Column(Text, nullable=True)
    person_linkedin_url = Column(Text, nullable=True)
    dismissed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
