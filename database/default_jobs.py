JOBS_DEFAULT = [
    {
        "id": 1, "company": "Tech Corp", "title": "Senior Python Developer", "date": "2024-10-11",
        "skills": ["python", "microservices", "aws", "docker", "kubernetes", "sql"],
        "certs": ["aws solutions architect"], "minYears": 5,
        "keywords": ["backend", "scalable", "cloud", "api", "lambda", "ec2", "s3", "rds"],
    },
    {
        "id": 2, "company": "Data Systems Inc", "title": "Data Scientist", "date": "2024-10-10",
        "skills": ["python", "pandas", "numpy", "ml", "sklearn", "sql", "aws"],
        "certs": [], "minYears": 3,
        "keywords": ["modeling", "statistics", "nlp", "timeseries", "notebook", "experimentation"],
    },
    {
        "id": 3, "company": "Cloud Solutions", "title": "DevOps Engineer", "date": "2024-10-09",
        "skills": ["docker", "kubernetes", "terraform", "ci/cd", "linux", "aws"],
        "certs": ["cka"], "minYears": 4,
        "keywords": ["observability", "sre", "prometheus", "grafana", "gitops"],
    },
    {
        "id": 4, "company": "FinTech Global", "title": "Full Stack Developer", "date": "2024-10-08",
        "skills": ["javascript", "react", "node", "sql", "python"],
        "certs": [], "minYears": 4,
        "keywords": ["payments", "security", "microfrontends", "testing", "cicd"],
    },
]
