"""Static course listings and education-based course recommendations.

`COURSE_LISTINGS` backs the public `/courses` page. `TRACKS` is a
separate, curated catalog grouped by degree track that feeds
`recommend_courses`.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

MAX_RECOMMENDATIONS = 15


def _listing(id_, name, category, duration, level, description, platform, url, instructor, rating, students, price):
    return {
        'id': id_, 'name': name, 'category': category, 'duration': duration, 'level': level,
        'description': description, 'platform': platform, 'url': url, 'instructor': instructor,
        'rating': rating, 'students': students, 'price': price,
    }


COURSE_LISTINGS: List[Dict] = [
    _listing('1', 'Introduction to Web Development', 'Web Development', '10 hours', 'Beginner',
             'Learn the basics of web development with HTML, CSS, and JavaScript.', 'Udemy',
             'https://www.udemy.com/course/intro-to-web-development/', 'John Doe', 4.5, '10,000+', '₹999'),
    _listing('2', 'Data Science Fundamentals', 'Data Science', '15 hours', 'Intermediate',
             'Learn the fundamentals of data science with Python and popular libraries.', 'Coursera',
             'https://www.coursera.org/learn/data-science-fundamentals', 'Jane Smith', 4.7, '25,000+',
             'Free (Certificate for ₹3,999)'),
    _listing('3', 'Mobile App Development with React Native', 'Mobile Development', '20 hours', 'Intermediate',
             'Build cross-platform mobile apps using React Native.', 'Simplilearn',
             'https://www.simplilearn.com/react-native-certification-training', 'Alex Johnson', 4.6, '15,000+',
             '₹2,499'),
    _listing('4', 'AWS Certified Cloud Practitioner', 'Cloud Computing', '16 hours', 'Beginner',
             'Everything you need to pass the AWS Certified Cloud Practitioner exam', 'AWS Training',
             'https://aws.amazon.com/certification/certified-cloud-practitioner/', 'AWS Team', 4.7, '100,000+',
             'Free (Exam: ₹11,500)'),
    _listing('5', 'Python for Data Science and Machine Learning', 'Data Science', '25 hours', 'Intermediate',
             'Learn how to use NumPy, Pandas, Seaborn, Matplotlib, and Machine Learning with Python', 'Udemy',
             'https://www.udemy.com/course/python-for-data-science-and-machine-learning-bootcamp/',
             'Jose Portilla', 4.6, '200,000+', '₹1,099'),
    _listing('6', 'Financial Accounting Fundamentals', 'B.Com', '8 weeks', 'Beginner',
             'Master the basics of financial accounting and bookkeeping principles.', 'Coursera',
             'https://www.coursera.org/learn/financial-accounting-fundamentals', 'Prof. Brian Bushee', 4.8,
             '50,000+', 'Free (Certificate for ₹3,999)'),
    _listing('7', 'Business Analytics Specialization', 'BBA', '6 months', 'Intermediate',
             'Learn to analyze data and make better business decisions with analytics.', 'Coursera',
             'https://www.coursera.org/specializations/business-analytics', 'Prof. Janice Hammond', 4.7,
             '120,000+', '₹2,999/month'),
    _listing('8', 'Data Structures & Algorithms in Java', 'BCA', '35 hours', 'Beginner',
             'Essential computer science concepts for software development interviews.', 'Udemy',
             'https://www.udemy.com/course/data-structures-and-algorithms-java/', 'Dheeraj Khatri', 4.6,
             '85,000+', '₹1,099'),
    _listing('9', 'Big Data Analytics with Hadoop', 'BDA', '12 weeks', 'Advanced',
             'Master big data processing using Hadoop and related technologies.', 'edX',
             'https://www.edx.org/course/big-data-analytics-with-hadoop', 'Prof. Rajiv Misra', 4.5, '35,000+',
             'Free (Certificate for ₹14,999)'),
    _listing('10', 'Strategic Management Specialization', 'MBA', '5 months', 'Advanced',
             'Develop your ability to think strategically and make better business decisions.', 'Coursera',
             'https://www.coursera.org/specializations/strategic-management', 'Prof. Michael Lenox', 4.8,
             '95,000+', '₹3,999/month'),
    _listing('11', 'Advanced Database Management', 'MCA', '10 weeks', 'Advanced',
             'In-depth study of database systems and management.', 'edX',
             'https://www.edx.org/course/advanced-database-queries', 'Prof. Jennifer Widom', 4.6, '28,000+',
             'Free (Certificate for ₹12,499)'),
    _listing('12', 'Nursing Leadership & Management', 'M.Sc Nursing', '8 weeks', 'Advanced',
             'Essential leadership skills for nursing professionals.', 'Coursera',
             'https://www.coursera.org/learn/leadership-nursing', 'Dr. Linda Aiken', 4.7, '15,000+',
             'Free (Certificate for ₹3,999)'),
    _listing('13', 'Digital Marketing Fundamentals', 'BBA/MBA', '6 weeks', 'Beginner',
             'Learn the core concepts of digital marketing and social media strategy.', 'Google Digital Garage',
             'https://learndigital.withgoogle.com/digitalgarage/course/digital-marketing', 'Google Experts', 4.7,
             '500,000+', 'Free'),
    _listing('14', 'The Complete JavaScript Course 2024', 'Web Development', '69 hours', 'Beginner to Advanced',
             'The modern JavaScript course for everyone! Master JavaScript with projects, challenges and theory.',
             'Udemy', 'https://www.udemy.com/course/the-complete-javascript-course/', 'Jonas Schmedtmann', 4.7,
             '800,000+', '₹1,099'),
]


def _course(name, category, duration, level, description, platform, url, instructor):
    return {
        'name': name, 'category': category, 'duration': duration, 'level': level,
        'description': description, 'platform': platform, 'url': url, 'instructor': instructor,
    }


TRACKS: Dict[str, List[Dict]] = {
    'bca': [
        _course('Web Development Bootcamp', 'Programming', '8 weeks', 'Beginner',
                'Learn HTML, CSS, JavaScript, and React to build modern web applications', 'Udemy',
                'https://www.udemy.com/course/the-complete-web-development-bootcamp/', 'Dr. Angela Yu'),
        _course('Data Structures & Algorithms', 'Computer Science', '10 weeks', 'Intermediate',
                'Master essential data structures and algorithms for technical interviews', 'Coursera',
                'https://www.coursera.org/specializations/data-structures-algorithms', 'UC San Diego'),
        _course('AWS Certified Solutions Architect', 'Cloud Computing', '6 weeks', 'Intermediate',
                'Deploy and manage applications on AWS cloud infrastructure', 'Udemy',
                'https://www.udemy.com/course/aws-certified-solutions-architect-associate-saa-c03/',
                'Stephane Maarek'),
        _course('Machine Learning Specialization', 'Artificial Intelligence', '12 weeks', 'Beginner',
                'Introduction to machine learning, neural networks, and AI applications', 'Coursera',
                'https://www.coursera.org/specializations/machine-learning-introduction', 'Andrew Ng'),
        _course('Full Stack MERN Development', 'Programming', '16 weeks', 'Advanced',
                'Master both frontend and backend development with MERN stack', 'Udemy',
                'https://www.udemy.com/course/mern-stack-front-to-back/', 'Brad Traversy'),
        _course('React Native - Mobile App Development', 'Mobile Development', '10 weeks', 'Intermediate',
                'Build cross-platform mobile apps with React Native', 'Udemy',
                'https://www.udemy.com/course/the-complete-react-native-and-redux-course/', 'Stephen Grider'),
    ],
    'bcom': [
        _course('Financial Accounting Fundamentals', 'Finance', '8 weeks', 'Beginner',
                'Learn accounting principles, financial statements, and bookkeeping', 'Coursera',
                'https://www.coursera.org/learn/wharton-accounting', 'University of Pennsylvania'),
        _course('Excel Skills for Business', 'Analytics', '6 weeks', 'Beginner',
                'Master Excel for data analysis, reporting, and business insights', 'Coursera',
                'https://www.coursera.org/specializations/excel', 'Macquarie University'),
        _course('Taxation & GST Compliance', 'Finance', '10 weeks', 'Intermediate',
                'Complete guide to Indian taxation system and GST compliance', 'Udemy',
                'https://www.udemy.com/course/complete-gst-course/', 'CA Yash Khandelwal'),
        _course('Financial Modeling & Valuation', 'Finance', '8 weeks', 'Advanced',
                'Build financial models for valuation, budgeting, and forecasting', 'Udemy',
                'https://www.udemy.com/course/financial-modeling-for-business-analysts-and-consultants/',
                '365 Careers'),
        _course('Corporate Finance Essentials', 'Finance', '12 weeks', 'Intermediate',
                'Learn capital budgeting, financial planning, and corporate strategy', 'Coursera',
                'https://www.coursera.org/learn/wharton-finance', 'University of Pennsylvania'),
        _course('QuickBooks Online Training', 'Accounting Software', '4 weeks', 'Beginner',
                'Master QuickBooks for small business accounting', 'Udemy',
                'https://www.udemy.com/course/quickbooks-pro-tutorial/', 'Simon Sez IT'),
        _course('Investment Banking Fundamentals', 'Finance', '10 weeks', 'Advanced',
                'Learn M&A, IPOs, and corporate finance advisory', 'Udemy',
                'https://www.udemy.com/course/investment-banking/', '365 Financial Analyst'),
        _course('Chartered Accountant Preparation', 'Accounting', '16 weeks', 'Advanced',
                'Complete CA foundation and intermediate preparation course', 'Coursera',
                'https://www.coursera.org/professional-certificates/accounting', 'ICAI Partners'),
    ],
    'bda': [
        _course('Business Analytics with Excel', 'Analytics', '8 weeks', 'Beginner',
                'Master Excel for business analytics, pivot tables, and data visualization', 'Coursera',
                'https://www.coursera.org/specializations/excel-data-analytics-visualization', 'Rice University'),
        _course('Data Analysis with Python', 'Data Science', '10 weeks', 'Intermediate',
                'Learn Python, Pandas, NumPy for data analysis and visualization', 'Coursera',
                'https://www.coursera.org/learn/data-analysis-with-python', 'IBM'),
        _course('SQL for Data Analysis', 'Database', '6 weeks', 'Beginner',
                'Master SQL queries for business intelligence and reporting', 'Udemy',
                'https://www.udemy.com/course/the-complete-sql-bootcamp/', 'Jose Portilla'),
        _course('Power BI Complete Course', 'Business Intelligence', '8 weeks', 'Intermediate',
                'Build interactive dashboards and reports with Power BI', 'Udemy',
                'https://www.udemy.com/course/microsoft-power-bi-up-running-with-power-bi-desktop/',
                'Maven Analytics'),
        _course('Tableau for Business Analytics', 'Data Visualization', '8 weeks', 'Intermediate',
                'Create stunning visualizations and dashboards with Tableau', 'Coursera',
                'https://www.coursera.org/specializations/data-visualization', 'UC Davis'),
        _course('Predictive Analytics & Machine Learning', 'Data Science', '12 weeks', 'Advanced',
                'Apply ML algorithms for business forecasting and predictions', 'Udemy',
                'https://www.udemy.com/course/machinelearning/', 'Kirill Eremenko'),
        _course('Big Data Analytics', 'Big Data', '10 weeks', 'Advanced',
                'Work with Hadoop, Spark, and big data technologies', 'Coursera',
                'https://www.coursera.org/specializations/big-data', 'UC San Diego'),
        _course('Statistical Analysis for Business', 'Statistics', '8 weeks', 'Intermediate',
                'Apply statistical methods for business decision making', 'Coursera',
                'https://www.coursera.org/specializations/business-statistics-analysis', 'Rice University'),
    ],
    'bba': [
        _course('Strategic Management & Planning', 'Business Strategy', '8 weeks', 'Intermediate',
                'Learn strategic planning, competitive analysis, and business models', 'Coursera',
                'https://www.coursera.org/learn/strategic-management', 'Copenhagen Business School'),
        _course('Digital Marketing Masterclass', 'Marketing', '10 weeks', 'Beginner',
                'Master SEO, SEM, social media marketing, and content strategy', 'Udemy',
                'https://www.udemy.com/course/learn-digital-marketing-course/', 'Phil Ebiner'),
        _course('Human Resource Management', 'HR', '8 weeks', 'Intermediate',
                'Recruitment, training, performance management, and employee relations', 'Coursera',
                'https://www.coursera.org/specializations/human-resource-management', 'University of Minnesota'),
        _course('Operations Management', 'Operations', '8 weeks', 'Intermediate',
                'Supply chain, logistics, and process optimization', 'Coursera',
                'https://www.coursera.org/learn/operations-management', 'University of Illinois'),
        _course('Entrepreneurship & Startup Management', 'Entrepreneurship', '10 weeks', 'Beginner',
                'Launch and grow your startup with proven strategies', 'Udemy',
                'https://www.udemy.com/course/the-complete-business-plan-course/', 'Chris Benjamin'),
        _course('Project Management Professional (PMP)', 'Project Management', '12 weeks', 'Advanced',
                'Complete PMP certification preparation with real-world projects', 'Udemy',
                'https://www.udemy.com/course/pmp-certification-exam-prep-course-pmbok-6th-edition/',
                'Joseph Phillips'),
        _course('Business Communication Skills', 'Communication', '6 weeks', 'Beginner',
                'Effective communication, presentation, and negotiation skills', 'Coursera',
                'https://www.coursera.org/specializations/business-english', 'University of Washington'),
        _course('Financial Management for Non-Finance', 'Finance', '8 weeks', 'Beginner',
                'Understand financial statements, budgeting, and financial planning', 'Coursera',
                'https://www.coursera.org/learn/finance-for-non-finance', 'Rice University'),
    ],
    'mba': [
        _course('Strategic Leadership and Management', 'Business Strategy', '10 weeks', 'Advanced',
                'Develop business strategies and competitive advantage', 'Coursera',
                'https://www.coursera.org/specializations/strategic-leadership', 'University of Illinois'),
        _course('Financial Planning & Analysis', 'Finance', '8 weeks', 'Advanced',
                'Master FP&A, budgeting, and financial decision-making', 'Udemy',
                'https://www.udemy.com/course/the-complete-financial-analyst-course/', '365 Careers'),
        _course('Business Analytics Specialization', 'Analytics', '12 weeks', 'Intermediate',
                'Use data analytics for business insights and decision-making', 'Coursera',
                'https://www.coursera.org/specializations/business-analytics', 'University of Pennsylvania'),
        _course('Digital Marketing Masterclass', 'Marketing', '8 weeks', 'Intermediate',
                'Learn SEO, SEM, social media marketing, and content strategy', 'Udemy',
                'https://www.udemy.com/course/learn-digital-marketing-course/', 'Phil Ebiner'),
    ],
    'tech': [
        _course('Python for Everybody', 'Programming', '8 weeks', 'Beginner',
                'Learn Python from basics to advanced concepts', 'Coursera',
                'https://www.coursera.org/specializations/python', 'University of Michigan'),
        _course('SQL - MySQL for Data Analytics', 'Database', '6 weeks', 'Intermediate',
                'Master SQL, database design, and optimization', 'Udemy',
                'https://www.udemy.com/course/the-ultimate-mysql-bootcamp-go-from-sql-beginner-to-expert/',
                'Colt Steele'),
        _course('DevOps, CI/CD & Kubernetes', 'DevOps', '10 weeks', 'Advanced',
                'Learn CI/CD, Docker, Kubernetes, and cloud deployment', 'Udemy',
                'https://www.udemy.com/course/docker-kubernetes-the-practical-guide/', 'Maximilian Schwarzmüller'),
    ],
}

# Checked in order; the first rule whose keyword appears in the education wins.
_EDUCATION_RULES = (
    (('bca', 'computer applications'), ('bca', 'tech')),
    (('bcom', 'b.com', 'commerce'), ('bcom',)),
    (('bda', 'business data analytics', 'data analytics'), ('bda',)),
    (('bba', 'b.b.a', 'business administration'), ('bba',)),
    (('mba', 'management'), ('mba', 'bba')),
    (('mca', 'b.tech', 'engineering'), ('tech', 'bca')),
)


def courses_for_education(education: Optional[str]) -> List[Dict]:
    """Return the track courses matching an education string.

    No education yields nothing; an unrecognised one yields a mixed
    sampler of the first BCA, BCom and BDA courses.
    """
    if not education:
        return []
    edu = education.lower()
    for keywords, tracks in _EDUCATION_RULES:
        if any(k in edu for k in keywords):
            return [course for track in tracks for course in TRACKS[track]]
    return TRACKS['bca'][:3] + TRACKS['bcom'][:3] + TRACKS['bda'][:2]


def _matches(course: Dict, terms: List[str]) -> bool:
    haystacks = (course['name'].lower(), course['category'].lower(), course['description'].lower())
    return any(term in h for term in terms for h in haystacks)


def _promote(courses: List[Dict], terms: Iterable[str]) -> List[Dict]:
    """Move courses mentioning any term to the front, keeping relative order."""
    lowered = [t.lower() for t in terms if t and t.strip()]
    if not lowered:
        return courses
    matched = [c for c in courses if _matches(c, lowered)]
    if not matched:
        return courses
    return matched + [c for c in courses if c not in matched]


def recommend_courses(
    education: Optional[str],
    skills: Optional[Iterable[str]] = None,
    interests: Optional[Iterable[str]] = None,
    limit: int = MAX_RECOMMENDATIONS,
) -> List[Dict]:
    """Education-driven recommendations re-ranked by skills, then interests.

    Interests are applied last, so interest matches end up ahead of
    skill-only matches. Duplicate course names keep their first position.
    """
    courses = courses_for_education(education)
    courses = _promote(courses, skills or [])
    courses = _promote(courses, interests or [])
    seen = set()
    unique = []
    for course in courses:
        if course['name'] in seen:
            continue
        seen.add(course['name'])
        unique.append(dict(course))
    return unique[:limit]
