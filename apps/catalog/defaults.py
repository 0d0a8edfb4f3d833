"""
Default worker catalog.
Loaded by ``manage.py seed_workers`` when the catalog is empty.
"""
from decimal import Decimal
from typing import Any, Dict, List


def _worker(name, category, title, description, rate, rating, location, skills) -> Dict[str, Any]:
    return {
        'name': name,
        'category': category,
        'title': title,
        'description': description,
        'hourly_rate': Decimal(rate),
        'rating': Decimal(rating),
        'location': location,
        'skills': skills,
    }


DEFAULT_WORKERS: List[Dict[str, Any]] = [
    # Design
    _worker('Sarah Chen', 'Design', 'UI/UX Designer',
            'UI/UX designer with 8 years of experience in web and mobile design.',
            '65', '4.9', 'San Francisco, CA', ['Figma', 'Prototyping', 'User Research']),
    _worker('Marcus Rivera', 'Design', 'Brand Designer',
            'Brand identity specialist and graphic designer.',
            '55', '4.7', 'New York, NY', ['Branding', 'Illustrator', 'Typography']),
    _worker('Aisha Patel', 'Design', 'Motion Designer',
            'Motion graphics and visual design expert.',
            '70', '4.8', 'Los Angeles, CA', ['After Effects', 'Animation']),
    _worker("James O'Brien", 'Design', 'Interior Designer',
            'Interior designer specializing in commercial spaces.',
            '80', '4.6', 'Chicago, IL', ['Space Planning', 'AutoCAD']),

    # Construction
    _worker('Mike Johnson', 'Construction', 'General Contractor',
            'Licensed general contractor with 15 years experience.',
            '85', '4.8', 'Houston, TX', ['Renovation', 'Project Management']),
    _worker('Carlos Hernandez', 'Construction', 'Framing Specialist',
            'Residential and commercial framing specialist.',
            '60', '4.5', 'Phoenix, AZ', ['Framing', 'Carpentry']),
    _worker('David Kim', 'Construction', 'Master Electrician',
            'Expert electrician, certified master electrician.',
            '75', '4.9', 'Seattle, WA', ['Wiring', 'Code Compliance']),
    _worker('Robert Taylor', 'Construction', 'Plumbing Contractor',
            'Plumbing contractor with full licensing.',
            '70', '4.7', 'Denver, CO', ['Pipe Fitting', 'Water Heaters']),

    # Technology
    _worker('Emma Wilson', 'Technology', 'Full-Stack Developer',
            'Full-stack developer specializing in React and Node.js.',
            '95', '4.9', 'Austin, TX', ['React', 'Node.js', 'PostgreSQL']),
    _worker('Alex Nguyen', 'Technology', 'DevOps Engineer',
            'DevOps engineer and cloud infrastructure expert.',
            '100', '4.8', 'Portland, OR', ['AWS', 'Kubernetes', 'Terraform']),
    _worker('Priya Sharma', 'Technology', 'Mobile Developer',
            'Mobile app developer for iOS and Android.',
            '90', '4.7', 'Boston, MA', ['Swift', 'Kotlin']),
    _worker('Tom Martinez', 'Technology', 'Security Analyst',
            'Cybersecurity analyst and penetration tester.',
            '110', '4.9', 'Washington, DC', ['Penetration Testing', 'Auditing']),

    # Cleaning
    _worker('Lisa Brown', 'Cleaning', 'House Cleaner',
            'Professional house cleaner with eco-friendly products.',
            '35', '4.8', 'Miami, FL', ['Eco Cleaning', 'Organizing']),
    _worker('Grace Lee', 'Cleaning', 'Deep Cleaning Specialist',
            'Deep cleaning and move-in/move-out specialist.',
            '40', '4.6', 'Atlanta, GA', ['Deep Cleaning', 'Move-out Cleaning']),
    _worker('Maria Santos', 'Cleaning', 'Office Cleaner',
            'Commercial office cleaning services.',
            '38', '4.7', 'Dallas, TX', ['Commercial Cleaning']),

    # Plumbing
    _worker('Frank Miller', 'Plumbing', 'Emergency Plumber',
            'Emergency plumbing and pipe repair specialist.',
            '80', '4.8', 'Philadelphia, PA', ['Pipe Repair', 'Leak Detection']),
    _worker('Hassan Ali', 'Plumbing', 'Remodeling Plumber',
            'Bathroom and kitchen remodeling plumber.',
            '75', '4.5', 'Detroit, MI', ['Fixture Installation', 'Remodeling']),

    # Electrical
    _worker('Ryan Cooper', 'Electrical', 'Residential Electrician',
            'Residential wiring and panel upgrades.',
            '70', '4.7', 'Nashville, TN', ['Panel Upgrades', 'Wiring']),
    _worker('Steven Park', 'Electrical', 'Solar Installer',
            'Solar panel installation and electrical systems.',
            '85', '4.9', 'San Diego, CA', ['Solar', 'Battery Storage']),

    # Moving
    _worker('Big T Moving Co.', 'Moving', 'Moving Company',
            'Full-service local and long-distance moving.',
            '50', '4.6', 'Charlotte, NC', ['Packing', 'Long-distance Moves']),
    _worker('Jake Williams', 'Moving', 'Furniture Assembler',
            'Furniture assembly and small moves specialist.',
            '40', '4.5', 'Orlando, FL', ['Furniture Assembly', 'Small Moves']),

    # Landscaping
    _worker('Green Thumb Landscaping', 'Landscaping', 'Landscaping Crew',
            'Lawn care, garden design, and maintenance.',
            '45', '4.7', 'Sacramento, CA', ['Lawn Care', 'Garden Design']),
    _worker('Pedro Gonzalez', 'Landscaping', 'Tree & Hardscape Specialist',
            'Tree service and hardscape installation.',
            '55', '4.8', 'San Antonio, TX', ['Tree Service', 'Hardscaping']),
]
