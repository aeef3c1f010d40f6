"""
Application Layer - Use Cases and Ports

Responsibility:
    Coordinates the flow of a submission between the API Layer and the
    outside world (mail transports, temporary storage).

Contains:
    - IntakeValidator: turns multipart parts into a validated Submission
    - ResumeDispatchUseCase: derives the filename and performs one bounded send
    - Ports: MailSenderProtocol, UploadStagingProtocol

Does NOT contain:
    - HTTP handling (belongs to API layer)
    - Transport details (belong to Infrastructure layer)
"""
