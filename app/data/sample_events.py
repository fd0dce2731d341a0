# Featured events shown on the home page; loaded by scripts/seed_events.py.
SAMPLE_EVENTS = [
    {
        "title": "React Conf 2025",
        "description": "Two days of talks and workshops from the React core team and community.",
        "overview": "The official React conference covering Server Components, the compiler and what is next for React.",
        "image": "/images/event1.png",
        "venue": "The Westin Hotel",
        "location": "Henderson, NV, USA",
        "date": "2025-05-15",
        "time": "9:00",
        "mode": "in-person",
        "audience": "Frontend developers and engineering managers",
        "agenda": [
            "09:00 AM - 10:00 AM | Keynote",
            "10:30 AM - 12:00 PM | React Compiler deep dive",
            "01:00 PM - 03:00 PM | Community talks",
        ],
        "organizer": "Meta Open Source",
        "tags": ["react", "frontend", "javascript"],
    },
    {
        "title": "HackMIT 2025",
        "description": "A weekend hackathon bringing together students from around the world.",
        "overview": "Build something in 24 hours with mentors, workshops and sponsor challenges.",
        "image": "/images/event2.png",
        "venue": "MIT Johnson Athletic Center",
        "location": "Cambridge, MA, USA",
        "date": "2025-09-13",
        "time": "10:00",
        "mode": "in-person",
        "audience": "Students and early-career developers",
        "agenda": [
            "10:00 AM | Check-in and team formation",
            "12:00 PM | Hacking begins",
            "12:00 PM (day 2) | Judging and awards",
        ],
        "organizer": "HackMIT",
        "tags": ["hackathon", "students"],
    },
    {
        "title": "PyCon US 2025",
        "description": "The largest annual gathering for the community using and developing Python.",
        "overview": "Tutorials, talks, sprints and an expo hall for everything Python.",
        "image": "/images/event3.png",
        "venue": "David L. Lawrence Convention Center",
        "location": "Pittsburgh, PA, USA",
        "date": "2025-05-14",
        "time": "08:30",
        "mode": "hybrid",
        "audience": "Python developers of all levels",
        "agenda": [
            "Tutorials",
            "Conference talks",
            "Development sprints",
        ],
        "organizer": "Python Software Foundation",
        "tags": ["python", "conference"],
    },
    {
        "title": "Cloud Native Meetup: Kubernetes in Production",
        "description": "An evening of lightning talks on running Kubernetes at scale.",
        "overview": "Practitioners share lessons on upgrades, autoscaling and multi-tenant clusters.",
        "image": "/images/event4.png",
        "venue": "Online",
        "location": "Worldwide",
        "date": "2025-06-03",
        "time": "18:00",
        "mode": "online",
        "audience": "Platform and DevOps engineers",
        "agenda": [
            "Welcome",
            "Lightning talks",
            "Open Q&A",
        ],
        "organizer": "CNCF Community Groups",
        "tags": ["kubernetes", "devops", "cloud"],
    },
]
