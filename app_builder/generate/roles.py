"""Per-role prompt material for the agent crew.

Each role has a persona header, the JSON shape it must answer with, an
instruction suffix for the user prompt, the sections a usable answer must
contain, canned defaults for those sections, and an offline answer used when
the completion endpoint cannot be reached.
"""

from enum import Enum
from typing import Any, Dict, Tuple


class AgentRole(str, Enum):
    ARCHITECT = "architect"
    UI_UX = "ui-ux"
    BACKEND = "backend"
    DATABASE = "database"
    TESTER = "tester"
    DEPLOYMENT = "deployment"


ROLE_ORDER: Tuple[AgentRole, ...] = (
    AgentRole.ARCHITECT,
    AgentRole.UI_UX,
    AgentRole.BACKEND,
    AgentRole.DATABASE,
    AgentRole.TESTER,
    AgentRole.DEPLOYMENT,
)

CRITICAL_ROLES = frozenset({AgentRole.ARCHITECT, AgentRole.UI_UX})

ROLE_INFO: Dict[AgentRole, Tuple[str, str]] = {
    AgentRole.ARCHITECT: ("System Architect", "Designing system architecture"),
    AgentRole.UI_UX: ("UI/UX Designer", "Creating user interface"),
    AgentRole.BACKEND: ("Backend Developer", "Building API endpoints"),
    AgentRole.DATABASE: ("Database Engineer", "Setting up data models"),
    AgentRole.TESTER: ("QA Tester", "Running tests and validation"),
    AgentRole.DEPLOYMENT: ("DevOps Engineer", "Preparing deployment"),
}

ROLE_HEADERS: Dict[AgentRole, str] = {
    AgentRole.ARCHITECT: (
        "You are an Elite System Architect with 15+ years of experience. "
        "Design scalable, maintainable architectures.\n\n"
        "EXPERTISE:\n"
        "- Microservices & distributed systems\n"
        "- Cloud-native architectures (AWS, GCP, Azure)\n"
        "- Performance optimization & caching strategies\n"
        "- Security best practices & compliance\n"
        "- Database design & optimization"
    ),
    AgentRole.UI_UX: (
        "You are an Elite UI/UX Designer specializing in modern, accessible, "
        "and conversion-optimized interfaces.\n\n"
        "EXPERTISE:\n"
        "- Modern design systems (Material Design, Human Interface Guidelines)\n"
        "- Accessibility (WCAG 2.1 AA compliance)\n"
        "- Performance-optimized components\n"
        "- Mobile-first responsive design\n"
        "- User psychology & conversion optimization"
    ),
    AgentRole.BACKEND: (
        "You are an Elite Backend Engineer with expertise in scalable, secure, "
        "and maintainable APIs.\n\n"
        "EXPERTISE:\n"
        "- RESTful & GraphQL API design\n"
        "- Microservices architecture\n"
        "- Database optimization & caching\n"
        "- Security (OAuth, JWT, encryption)\n"
        "- Performance monitoring & logging"
    ),
    AgentRole.DATABASE: (
        "You are an Elite Database Engineer specializing in high-performance, "
        "scalable database design.\n\n"
        "EXPERTISE:\n"
        "- Relational & NoSQL database design\n"
        "- Query optimization & indexing\n"
        "- Data modeling & normalization\n"
        "- Backup & disaster recovery\n"
        "- Performance monitoring & tuning"
    ),
    AgentRole.TESTER: (
        "You are an Elite QA Engineer specializing in comprehensive testing "
        "strategies and quality assurance.\n\n"
        "EXPERTISE:\n"
        "- Test-driven development (TDD)\n"
        "- Automated testing (unit, integration, e2e)\n"
        "- Performance testing & load testing\n"
        "- Security testing & vulnerability assessment\n"
        "- Code quality & static analysis"
    ),
    AgentRole.DEPLOYMENT: (
        "You are an Elite DevOps Engineer specializing in cloud-native "
        "deployments and infrastructure automation.\n\n"
        "EXPERTISE:\n"
        "- Container orchestration (Docker, Kubernetes)\n"
        "- Cloud platforms (AWS, GCP, Azure, Vercel)\n"
        "- CI/CD pipelines & automation\n"
        "- Infrastructure as Code (Terraform, CloudFormation)\n"
        "- Monitoring & observability"
    ),
}

RESPONSE_SHAPES: Dict[AgentRole, str] = {
    AgentRole.ARCHITECT: """{
  "architecture": {
    "pattern": "microservices|monolith|serverless",
    "description": "detailed architecture explanation",
    "scalability": "horizontal|vertical scaling strategy",
    "security": "authentication, authorization, encryption details"
  },
  "stack": {
    "frontend": "framework with reasoning",
    "backend": "technology with justification",
    "database": "database choice with rationale",
    "cache": "caching strategy",
    "deployment": "containerization & orchestration"
  },
  "structure": {
    "folders": ["organized folder structure"],
    "patterns": ["design patterns to implement"],
    "integrations": ["third-party services needed"]
  },
  "performance": {
    "metrics": "expected performance benchmarks",
    "optimization": "key optimization strategies"
  }
}""",
    AgentRole.UI_UX: """{
  "design": {
    "theme": "design system approach",
    "colors": "color palette with accessibility ratios",
    "typography": "font hierarchy and readability",
    "spacing": "consistent spacing system"
  },
  "components": [
    {
      "name": "component name",
      "purpose": "functional purpose",
      "code": "complete React component with TypeScript",
      "accessibility": "ARIA labels and keyboard navigation",
      "responsive": "mobile-first breakpoints"
    }
  ],
  "layout": {
    "structure": "page layout strategy",
    "navigation": "navigation pattern",
    "responsive": "breakpoint strategy"
  },
  "ux": {
    "userFlow": "optimized user journey",
    "interactions": "micro-interactions and animations",
    "performance": "loading states and optimization"
  }
}""",
    AgentRole.BACKEND: """{
  "api": {
    "architecture": "REST|GraphQL|hybrid approach",
    "authentication": "JWT|OAuth2|session strategy",
    "rateLimit": "rate limiting configuration",
    "validation": "input validation strategy"
  },
  "endpoints": [
    {
      "path": "/api/endpoint",
      "method": "GET|POST|PUT|DELETE",
      "purpose": "endpoint functionality",
      "code": "complete implementation with error handling",
      "validation": "input validation rules",
      "security": "authorization requirements"
    }
  ],
  "middleware": {
    "security": "helmet, cors, rate limiting",
    "logging": "structured logging implementation",
    "monitoring": "health checks and metrics"
  },
  "performance": {
    "caching": "caching strategy implementation",
    "optimization": "query optimization techniques"
  }
}""",
    AgentRole.DATABASE: """{
  "design": {
    "type": "PostgreSQL|MongoDB|hybrid",
    "reasoning": "database choice justification",
    "scalability": "horizontal|vertical scaling approach"
  },
  "schema": {
    "tables": [
      {
        "name": "table_name",
        "purpose": "table functionality",
        "fields": [
          {
            "name": "field_name",
            "type": "data_type",
            "constraints": "constraints and validations"
          }
        ],
        "indexes": ["optimized index strategy"],
        "relationships": "foreign key relationships"
      }
    ]
  },
  "optimization": {
    "indexes": "performance index strategy",
    "queries": "optimized query patterns",
    "caching": "database caching approach"
  },
  "seedData": "realistic sample data for testing"
}""",
    AgentRole.TESTER: """{
  "strategy": {
    "approach": "TDD|BDD testing methodology",
    "coverage": "target code coverage percentage",
    "automation": "CI/CD integration strategy"
  },
  "tests": [
    {
      "type": "unit|integration|e2e",
      "file": "test file name",
      "code": "complete test implementation",
      "coverage": "what functionality is tested"
    }
  ],
  "quality": {
    "linting": "ESLint/Prettier configuration",
    "typeChecking": "TypeScript strict mode settings",
    "security": "security vulnerability checks"
  },
  "performance": {
    "benchmarks": "performance testing criteria",
    "monitoring": "performance monitoring setup"
  }
}""",
    AgentRole.DEPLOYMENT: """{
  "strategy": {
    "platform": "deployment platform choice",
    "approach": "containerized|serverless|traditional",
    "scaling": "auto-scaling configuration"
  },
  "containers": {
    "dockerfile": "optimized Dockerfile",
    "compose": "docker-compose configuration",
    "kubernetes": "K8s deployment manifests"
  },
  "cicd": {
    "pipeline": "GitHub Actions|GitLab CI configuration",
    "stages": "build, test, deploy stages",
    "environments": "staging and production setup"
  },
  "monitoring": {
    "logging": "centralized logging setup",
    "metrics": "application metrics collection",
    "alerts": "alerting and notification setup"
  }
}""",
}

ROLE_INSTRUCTIONS: Dict[AgentRole, str] = {
    AgentRole.ARCHITECT: "Focus on creating a robust, scalable architecture that can handle the requirements efficiently.",
    AgentRole.UI_UX: "Design modern, accessible components that provide excellent user experience and are mobile-first.",
    AgentRole.BACKEND: "Create secure, performant APIs with proper error handling and validation.",
    AgentRole.DATABASE: "Design an optimized database schema with proper relationships and indexing.",
    AgentRole.TESTER: "Develop comprehensive tests that ensure code quality and reliability.",
    AgentRole.DEPLOYMENT: "Create production-ready deployment configurations with monitoring and scaling.",
}

REQUIRED_SECTIONS: Dict[AgentRole, Tuple[str, ...]] = {
    AgentRole.ARCHITECT: ("architecture", "stack", "structure"),
    AgentRole.UI_UX: ("design", "components", "layout"),
    AgentRole.BACKEND: ("api", "endpoints", "middleware"),
    AgentRole.DATABASE: ("design", "schema", "optimization"),
    AgentRole.TESTER: ("strategy", "tests", "quality"),
    AgentRole.DEPLOYMENT: ("strategy", "containers", "cicd"),
}

# Filled into a parsed answer that lacks a required section.
DEFAULT_SECTIONS: Dict[AgentRole, Dict[str, Any]] = {
    AgentRole.ARCHITECT: {
        "architecture": {"pattern": "microservices", "description": "Scalable architecture"},
        "stack": {"frontend": "Next.js", "backend": "Node.js", "database": "PostgreSQL"},
        "structure": ["src/", "components/", "pages/", "api/"],
    },
    AgentRole.UI_UX: {
        "design": {"theme": "modern", "colors": "accessible palette"},
        "components": [{"name": "App", "code": "// Component code", "purpose": "main app"}],
        "layout": {"structure": "responsive"},
    },
    AgentRole.BACKEND: {
        "api": {"architecture": "REST", "authentication": "JWT"},
        "endpoints": [{"path": "/api/health", "method": "GET", "code": "// Health check"}],
        "middleware": {"security": "helmet, cors"},
    },
    AgentRole.DATABASE: {
        "design": {"type": "PostgreSQL", "reasoning": "ACID compliance"},
        "schema": {"tables": []},
        "optimization": {"indexes": "performance indexes"},
    },
    AgentRole.TESTER: {
        "strategy": {"approach": "TDD", "coverage": "80%"},
        "tests": [{"type": "unit", "file": "test.js", "code": "// Test code"}],
        "quality": {"linting": "ESLint"},
    },
    AgentRole.DEPLOYMENT: {
        "strategy": {"platform": "Vercel", "approach": "serverless"},
        "containers": {"dockerfile": "FROM node:18"},
        "cicd": {"pipeline": "GitHub Actions"},
    },
}


def offline_answer(role: AgentRole, prompt: str) -> Dict[str, Any]:
    """Canned answer used when the completion endpoint is unreachable."""
    if role is AgentRole.ARCHITECT:
        return {
            "architecture": {
                "pattern": "microservices",
                "description": f"Scalable microservices architecture for {prompt}",
                "scalability": "horizontal scaling with load balancers",
                "security": "JWT authentication, HTTPS, input validation",
            },
            "stack": {
                "frontend": "Next.js with TypeScript",
                "backend": "Node.js with Express",
                "database": "PostgreSQL with Redis caching",
                "deployment": "Docker containers on Vercel/AWS",
            },
            "structure": {
                "folders": ["src/", "components/", "pages/", "api/", "lib/", "types/"],
                "patterns": ["MVC", "Repository Pattern", "Dependency Injection"],
                "integrations": ["Authentication", "Database", "Caching", "Monitoring"],
            },
        }
    if role is AgentRole.UI_UX:
        return {
            "design": {
                "theme": "modern minimalist",
                "colors": "blue and white with dark mode support",
                "typography": "Inter font family with clear hierarchy",
                "spacing": "8px grid system",
            },
            "components": [
                {
                    "name": "Header",
                    "purpose": "navigation and branding",
                    "code": "// Modern header component with responsive navigation",
                    "accessibility": "ARIA labels and keyboard navigation",
                    "responsive": "mobile-first breakpoints",
                },
                {
                    "name": "Dashboard",
                    "purpose": "main application interface",
                    "code": "// Dashboard with cards and data visualization",
                    "accessibility": "screen reader friendly",
                    "responsive": "grid layout adapts to screen size",
                },
            ],
            "layout": {
                "structure": "responsive grid layout",
                "navigation": "sidebar with mobile hamburger menu",
                "responsive": "mobile-first approach",
            },
        }
    if role is AgentRole.BACKEND:
        return {
            "api": {
                "architecture": "RESTful API",
                "authentication": "JWT with refresh tokens",
                "rateLimit": "100 requests per minute",
                "validation": "Joi schema validation",
            },
            "endpoints": [
                {
                    "path": "/api/auth/login",
                    "method": "POST",
                    "purpose": "user authentication",
                    "code": "// Login endpoint with JWT generation",
                    "validation": "email and password validation",
                    "security": "bcrypt password hashing",
                },
                {
                    "path": "/api/users",
                    "method": "GET",
                    "purpose": "fetch user data",
                    "code": "// Protected user data endpoint",
                    "validation": "JWT token validation",
                    "security": "role-based access control",
                },
            ],
            "middleware": {
                "security": "helmet, cors, rate limiting",
                "logging": "winston structured logging",
                "monitoring": "health checks and metrics",
            },
        }
    if role is AgentRole.DATABASE:
        return {
            "design": {
                "type": "PostgreSQL",
                "reasoning": "ACID compliance and complex queries",
                "scalability": "read replicas and connection pooling",
            },
            "schema": {
                "tables": [
                    {
                        "name": "users",
                        "purpose": "user account management",
                        "fields": [
                            {"name": "id", "type": "UUID", "constraints": "PRIMARY KEY"},
                            {"name": "email", "type": "VARCHAR(255)", "constraints": "UNIQUE NOT NULL"},
                            {"name": "password_hash", "type": "VARCHAR(255)", "constraints": "NOT NULL"},
                        ],
                        "indexes": ["email", "created_at"],
                        "relationships": "one-to-many with projects",
                    }
                ]
            },
            "optimization": {
                "indexes": "B-tree indexes on frequently queried columns",
                "queries": "optimized joins and pagination",
                "caching": "Redis for session and query caching",
            },
        }
    if role is AgentRole.TESTER:
        return {
            "strategy": {
                "approach": "Test-Driven Development",
                "coverage": "85% minimum coverage",
                "automation": "CI/CD pipeline integration",
            },
            "tests": [
                {
                    "type": "unit",
                    "file": "components.test.tsx",
                    "code": "// React component unit tests",
                    "coverage": "component rendering and interactions",
                },
                {
                    "type": "integration",
                    "file": "api.test.ts",
                    "code": "// API endpoint integration tests",
                    "coverage": "request/response validation",
                },
            ],
            "quality": {
                "linting": "ESLint with TypeScript rules",
                "typeChecking": "strict TypeScript configuration",
                "security": "npm audit and dependency scanning",
            },
        }
    return {
        "strategy": {
            "platform": "Vercel for frontend, Railway for backend",
            "approach": "containerized deployment",
            "scaling": "auto-scaling based on traffic",
        },
        "containers": {
            "dockerfile": (
                "FROM node:18-alpine\nWORKDIR /app\nCOPY package*.json ./\n"
                "RUN npm ci\nCOPY . .\nRUN npm run build\nEXPOSE 3000\n"
                'CMD ["npm", "start"]'
            ),
            "compose": "version: '3.8'\nservices:\n  app:\n    build: .\n    ports:\n      - \"3000:3000\"",
            "kubernetes": "deployment and service manifests",
        },
        "cicd": {
            "pipeline": "GitHub Actions workflow",
            "stages": "test, build, deploy",
            "environments": "staging and production",
        },
    }
