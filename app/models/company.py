from sqlalchemy import Column, Integer, String, Text, CheckConstraint
from app.core.database import Base


class Company(Base):
    """
    A company that posts jobs.

    The handle is the public identifier used in URLs and never changes
    after creation.
    """
    __tablename__ = "companies"
    __table_args__ = (
        CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),
    )

    handle = Column(String(25), primary_key=True)
    name = Column(Text, unique=True, nullable=False)
    num_employees = Column(Integer, nullable=True)
    description = Column(Text, nullable=False)
    logo_url = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"
