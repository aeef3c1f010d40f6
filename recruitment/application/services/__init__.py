"""
Application Services

Contains:
    - IntakeValidator (intake_validator.py)
    - ResumeDispatchUseCase (resume_dispatch_use_case.py)
"""
