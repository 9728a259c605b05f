# utils/serializers.py
"""
JSON views of the scheduling models.
Session payloads join in the class, instructor and member names a client needs
to render a timetable without further lookups.
"""


def serialize_class(fitness_class):
    return fitness_class.to_dict()


def serialize_enrollment(enrollment):
    member = enrollment.member
    return {
        'member_id': enrollment.member_id,
        'member_name': member.full_name if member else None,
        'member_email': member.email if member else None,
        'enrollment_date': enrollment.enrollment_date.isoformat(),
        'attended': enrollment.attended
    }


def serialize_session(session, include_enrollments=True, now=None):
    """
    Convert a class session into its API representation.

    Args:
        session: ClassSession instance
        include_enrollments: Whether to add the per-member enrollment list
        now: Reference instant for is_past, defaults to the current UTC time

    Returns:
        dict: Session columns plus display data and derived views
    """
    data = session.to_dict()

    fitness_class = session.fitness_class
    data['class'] = {
        'id': fitness_class.id,
        'name': fitness_class.name,
        'category': fitness_class.category,
        'difficulty': fitness_class.difficulty,
        'duration': fitness_class.duration
    } if fitness_class else None

    instructor = session.instructor
    data['instructor'] = {
        'id': instructor.id,
        'name': instructor.full_name,
        'email': instructor.email
    } if instructor else None

    data['effective_capacity'] = session.effective_capacity
    data['enrolled_count'] = session.enrolled_count
    data['is_full'] = session.is_full()
    data['is_past'] = session.is_past(now)
    data['attendance_stats'] = session.attendance_stats()

    if include_enrollments:
        data['enrollments'] = [serialize_enrollment(e) for e in session.enrollments]

    return data


def serialize_attendance(attendance):
    data = attendance.to_dict()
    data['member_name'] = attendance.member.full_name if attendance.member else None
    return data
